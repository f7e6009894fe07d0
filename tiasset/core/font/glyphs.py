from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Sequence, Tuple

from tiasset.core.definitions import relative_parent_suffix
from tiasset.core.errors import DefinitionError
from tiasset.core.sprite.image import RawImage

from .definition import FontGlyph

log = logging.getLogger("tiasset.font")


def get_glyph_path(font: Path, glyph: Path) -> Path:
    return relative_parent_suffix(font, glyph, ".png")


class FontGlyphs:
    """Glyph bitmaps and widths keyed by code point."""

    def __init__(self) -> None:
        self.glyphs: Dict[int, Tuple[bytes, int]] = {}
        self.first_glyph = 255
        self.last_glyph = 0

    @classmethod
    def from_definition(cls, font: Path, glyphs: Iterable[FontGlyph], height: int = 0) -> "FontGlyphs":
        output = cls()
        for glyph in glyphs:
            path = get_glyph_path(font, glyph.source)
            width, glyph_height, pixels = RawImage.load(path).into_monochrome()
            if width > 255:
                raise DefinitionError(f"Glyph width must be within range [0, 255]. Found width: {width} ({path})")
            if height and glyph_height != height:
                log.warning("Glyph %d is %d pixels tall but the font height is %d: %s", glyph.index, glyph_height, height, path)
            output.insert(glyph.index, width, cls.pixels_to_bytes(width, pixels))
        return output

    @staticmethod
    def pixels_to_bytes(width: int, pixels: Sequence[bool]) -> bytes:
        """Packs each row MSB first; rows are padded to a whole byte."""
        out = bytearray()
        if width == 0:
            return bytes(out)
        for row_start in range(0, len(pixels) - width + 1, width):
            row = pixels[row_start:row_start + width]
            for chunk_start in range(0, width, 8):
                byte = 0
                for bit, set_ in enumerate(row[chunk_start:chunk_start + 8]):
                    if set_:
                        byte |= 1 << (7 - bit)
                out.append(byte)
        return bytes(out)

    def insert(self, index: int, width: int, bitmap: bytes) -> None:
        self.first_glyph = min(self.first_glyph, index)
        self.last_glyph = max(self.last_glyph, index)
        if index in self.glyphs:
            log.warning("Glyph is already defined: %d", index)
        self.glyphs[index] = (bytes(bitmap), width)

    def glyph_count(self) -> int:
        """Number of code points spanned, as stored in a u8 (256 is stored as 0)."""
        if not self.glyphs:
            raise DefinitionError("Font has no glyphs")
        return (self.last_glyph - self.first_glyph + 1) & 0xFF
