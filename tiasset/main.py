from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional

from tiasset.core.config import configure_logging, load_settings
from tiasset.core.errors import AssetBuildError
from tiasset.core.font.builder import build_font_pack
from tiasset.core.output.formats import OutputType
from tiasset.core.sprite.builder import build_sprite

log = logging.getLogger("tiasset.cli")

_BUILDERS = {
    "fontpack": build_font_pack,
    "sprite": build_sprite,
}


def _version() -> str:
    try:
        return version("tiasset")
    except PackageNotFoundError:
        return "0.0.0"


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="tiasset", description="Build TI-84 Plus CE assets from definition files.")
    ap.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    for name, help_text, definition_help in (
        ("fontpack", "Build a fontpack definition file", "The fontpack definition file"),
        ("sprite", "Build a sprite definition file", "The sprite definition file"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("definition", help=definition_help)
        cmd.add_argument("output", help="The file, or folder, to output the final asset to")
        cmd.add_argument(
            "--format",
            dest="output_format",
            choices=[t.value for t in OutputType],
            default=None,
            help="Output format (default: TIASSET_OUTPUT_FORMAT or binary)",
        )
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)

    try:
        settings = load_settings()
    except AssetBuildError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    configure_logging(settings, verbose=args.verbose)

    output_type = OutputType(args.output_format) if args.output_format else settings.output_format
    try:
        written = _BUILDERS[args.command](args.definition, args.output, output_type)
    except AssetBuildError as exc:
        log.debug("%s build failed", args.command, exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote: {written}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
