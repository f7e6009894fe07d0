from __future__ import annotations

import pytest
from pydantic import ValidationError

from tiasset.core.font.definition import FontDefinition, FontGlyph, FontStyle, FontWeight


def test_glyph_index_number():
    assert FontGlyph(index=12, source="a").index == 12


def test_glyph_index_char():
    assert FontGlyph(index="a", source="a").index == ord("a")


def test_glyph_index_nonprintable_char():
    assert FontGlyph(index="\n", source="a").index == 10


@pytest.mark.parametrize("bad", ["é", "ab", "", 256, -1, True, 65.0, None])
def test_glyph_index_rejected(bad):
    with pytest.raises(ValidationError):
        FontGlyph(index=bad, source="a")


def test_font_weight_snake_case():
    assert FontDefinition(weight="thin").weight == FontWeight.THIN
    assert FontDefinition(weight="extra_bold").weight == FontWeight.EXTRA_BOLD
    with pytest.raises(ValidationError):
        FontDefinition(weight="ExtraBold")


def test_font_weight_codes():
    assert FontWeight.THIN.code == 0x20
    assert FontWeight.NORMAL.code == 0x80
    assert FontWeight.BLACK.code == 0xF0
    assert FontDefinition().weight_code == 0
    assert FontDefinition(weight="bold").weight_code == 0xC0


def test_font_style_byte():
    assert FontStyle().to_byte() == 0
    assert FontStyle(serif=True, italic=True).to_byte() == 0b0000_0101
    assert FontStyle(serif=True, oblique=True, italic=True, monospaced=True).to_byte() == 0b0000_1111


def test_font_definition_defaults():
    font = FontDefinition()
    assert font.version == 0
    assert font.height == 0
    assert font.style == FontStyle()
    assert font.glyphs == []
