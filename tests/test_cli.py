from __future__ import annotations

import logging
import runpy
import sys

import pytest

from tiasset.main import main


def _write_font_pack(tmp_path, write_glyph_png):
    write_glyph_png(tmp_path / "glyphs" / "A.png", ["#.", "##"])
    (tmp_path / "mono.toml").write_text(
        '[font]\nheight = 2\n[[font.glyphs]]\nindex = "A"\nsource = "glyphs/A"\n',
        encoding="utf-8",
    )
    pack = tmp_path / "pack.yaml"
    pack.write_text("pack:\n  metadata:\n    family_name: Mono\n  fonts: [mono]\n", encoding="utf-8")
    return pack


def test_fontpack_binary(tmp_path, write_glyph_png, capsys):
    pack = _write_font_pack(tmp_path, write_glyph_png)
    out = tmp_path / "mono.bin"

    rc = main(["fontpack", str(pack), str(out)])

    assert rc == 0
    assert f"Wrote: {out}" in capsys.readouterr().out
    data = out.read_bytes()
    assert data.startswith(b"FONTPACK")
    assert data.endswith(bytes([0b1000_0000, 0b1100_0000]))


def test_fontpack_assembly_from_env(tmp_path, write_glyph_png, monkeypatch):
    monkeypatch.setenv("TIASSET_OUTPUT_FORMAT", "assembly")
    pack = _write_font_pack(tmp_path, write_glyph_png)

    rc = main(["fontpack", str(pack), str(tmp_path)])

    assert rc == 0
    text = (tmp_path / "pack.asm").read_text(encoding="utf-8")
    assert "pack:" in text.splitlines()
    assert "\tdb\t0x46, 0x4F, 0x4E, 0x54, 0x50, 0x41, 0x43, 0x4B" in text


def test_format_flag_overrides_env(tmp_path, write_glyph_png, monkeypatch):
    monkeypatch.setenv("TIASSET_OUTPUT_FORMAT", "assembly")
    pack = _write_font_pack(tmp_path, write_glyph_png)

    rc = main(["fontpack", str(pack), str(tmp_path), "--format", "c"])

    assert rc == 0
    assert (tmp_path / "pack.h").exists()
    assert not (tmp_path / "pack.asm").exists()


def test_sprite_command(tmp_path, write_rgb_png, capsys):
    write_rgb_png(tmp_path / "dot.png", [[(255, 255, 255)]])
    definition = tmp_path / "dot.toml"
    definition.write_text('[sprite]\nsource = "dot"\n', encoding="utf-8")

    rc = main(["sprite", str(definition), str(tmp_path / "dot.bin")])

    assert rc == 0
    assert (tmp_path / "dot.bin").read_bytes() == bytes([1, 1, 0xFF])


def test_build_error_reports_and_fails(tmp_path, capsys):
    definition = tmp_path / "pack.toml"
    definition.write_text('[pack]\nfonts = ["missing"]\n', encoding="utf-8")

    rc = main(["fontpack", str(definition), str(tmp_path / "out.bin")])

    assert rc == 1
    assert "ERROR:" in capsys.readouterr().err
    assert not (tmp_path / "out.bin").exists()


def test_bad_config_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("TIASSET_LOG_LEVEL", "loud")
    rc = main(["sprite", str(tmp_path / "x.toml"), str(tmp_path / "x.bin")])
    assert rc == 1
    assert "TIASSET_LOG_LEVEL" in capsys.readouterr().err


def test_unknown_format_is_usage_error(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["sprite", "a.toml", "b.bin", "--format", "png"])
    assert exc.value.code == 2


def test_non_utf8_definition_reports_error(tmp_path, capsys):
    definition = tmp_path / "pack.toml"
    definition.write_bytes(b'[pack]\nfonts = ["\xff\xfe"]\n')

    rc = main(["fontpack", str(definition), str(tmp_path / "out.bin")])

    assert rc == 1
    assert "Failed to read definition" in capsys.readouterr().err


def test_verbose_forces_debug(tmp_path, write_rgb_png):
    write_rgb_png(tmp_path / "dot.png", [[(0, 0, 0)]])
    definition = tmp_path / "dot.toml"
    definition.write_text('[sprite]\nsource = "dot"\n', encoding="utf-8")

    rc = main(["-v", "sprite", str(definition), str(tmp_path / "dot.bin")])

    assert rc == 0
    assert logging.getLogger("tiasset").level == logging.DEBUG


def test_module_entry_point(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["tiasset", "--version"])
    with pytest.raises(SystemExit) as exc:
        runpy.run_module("tiasset", run_name="__main__")
    assert exc.value.code == 0
    assert capsys.readouterr().out.startswith("tiasset ")
