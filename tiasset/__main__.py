from tiasset.main import main

raise SystemExit(main())
