from __future__ import annotations

import pytest

from tiasset.core.errors import AssetBuildError
from tiasset.core.output.formats import (
    OutputType,
    render_assembly,
    render_c,
    resolve_output_path,
    to_identifier,
    write_asset,
)


def test_to_identifier():
    assert to_identifier("my-font.v2") == "my_font_v2"
    assert to_identifier("8x8") == "_8x8"


def test_render_assembly_wraps_lines():
    text = render_assembly("font", bytes(range(18)))
    lines = text.splitlines()
    assert lines[0] == "; font: 18 bytes"
    assert lines[1] == "font:"
    assert lines[2].startswith("\tdb\t0x00, 0x01")
    assert lines[2].endswith("0x0F")
    assert lines[3] == "\tdb\t0x10, 0x11"


def test_render_c_header():
    text = render_c("small-font", b"\x01\xAB")
    assert "#ifndef SMALL_FONT_H" in text
    assert "#define SMALL_FONT_SIZE 2" in text
    assert "static const unsigned char small_font[2] = {\n    0x01, 0xAB\n};" in text
    assert text.endswith("#endif /* SMALL_FONT_H */\n")


def test_resolve_output_path_for_directory(tmp_path):
    assert resolve_output_path(tmp_path, OutputType.ASSEMBLY, "pack") == tmp_path / "pack.asm"
    assert resolve_output_path(tmp_path / "x.bin", OutputType.BINARY, "pack") == tmp_path / "x.bin"


def test_write_asset_creates_parents(tmp_path):
    out = write_asset(tmp_path / "a" / "b" / "asset.bin", b"\x01\x02", OutputType.BINARY, "ignored")
    assert out.read_bytes() == b"\x01\x02"


def test_write_asset_failure_is_wrapped(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(AssetBuildError, match="Failed to write"):
        write_asset(blocker / "asset.bin", b"", OutputType.BINARY, "asset")
