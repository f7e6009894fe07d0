"""
Font pack and font definition models.

Field descriptions follow the fontlibc documentation of the CE toolchain.
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, Field

DEFAULT_CODE_PAGE = "ASCII"

U8 = Annotated[int, Field(ge=0, le=255)]


class FontPackMetadata(BaseModel):
    # A short, human-readable typeface name, such as "Times".
    family_name: Optional[str] = None
    # A short string naming the typeface designer.
    author: Optional[str] = None
    # A short copyright claim.
    pseudocopyright: Optional[str] = None
    # A brief description of the font.
    description: Optional[str] = None
    # Free-form; "1.0.0.0" and "1 June 2019" are both fine.
    version: Optional[str] = None
    # Suggested: "ASCII", "TIOS", "ISO-8859-1", "Windows 1252", "Calculator 1252".
    code_page: Optional[str] = DEFAULT_CODE_PAGE

    def strings(self) -> List[Optional[str]]:
        """Metadata strings in the order the pack stores their pointers."""
        return [
            self.family_name,
            self.author,
            self.pseudocopyright,
            self.description,
            self.version,
            self.code_page,
        ]


class FontPackDefinition(BaseModel):
    metadata: FontPackMetadata = Field(default_factory=FontPackMetadata)
    # Paths relative to the pack definition, without an extension.
    fonts: List[Path] = Field(default_factory=list)


class FontWeight(str, Enum):
    THIN = "thin"
    EXTRA_LIGHT = "extra_light"
    LIGHT = "light"
    SEMILIGHT = "semilight"
    NORMAL = "normal"
    MEDIUM = "medium"
    SEMIBOLD = "semibold"
    BOLD = "bold"
    EXTRA_BOLD = "extra_bold"
    BLACK = "black"

    @property
    def code(self) -> int:
        return _WEIGHT_CODES[self]


_WEIGHT_CODES = {
    FontWeight.THIN: 0x20,
    FontWeight.EXTRA_LIGHT: 0x30,
    FontWeight.LIGHT: 0x40,
    FontWeight.SEMILIGHT: 0x60,
    FontWeight.NORMAL: 0x80,
    FontWeight.MEDIUM: 0x90,
    FontWeight.SEMIBOLD: 0xA0,
    FontWeight.BOLD: 0xC0,
    FontWeight.EXTRA_BOLD: 0xE0,
    FontWeight.BLACK: 0xF0,
}


class FontStyle(BaseModel):
    # Clear means sans-serif.
    serif: bool = False
    # Slanted like italic text, without the cursive styling.
    oblique: bool = False
    # With oblique also set, the two styles are assumed identical.
    italic: bool = False
    # Not enforced; a variable-width font can claim to be monospaced.
    monospaced: bool = False

    def to_byte(self) -> int:
        output = 0
        if self.serif:
            output |= 0b0000_0001
        if self.oblique:
            output |= 0b0000_0010
        if self.italic:
            output |= 0b0000_0100
        if self.monospaced:
            output |= 0b0000_1000
        return output


def _coerce_glyph_index(value: Any) -> Any:
    # bool is an int subclass; never accept it as a code point
    if isinstance(value, bool):
        raise ValueError("glyph index must be an integer or a single ASCII character")
    if isinstance(value, str):
        if len(value) != 1 or not value.isascii():
            raise ValueError(f"glyph index string must be exactly one ASCII character; got {value!r}")
        return ord(value)
    if not isinstance(value, int):
        raise ValueError(f"glyph index must be an integer or a single ASCII character; got {value!r}")
    return value


# Where a glyph is mapped in the code page: a number or a single ASCII char.
GlyphIndex = Annotated[int, BeforeValidator(_coerce_glyph_index), Field(ge=0, le=255)]


class FontGlyph(BaseModel):
    index: GlyphIndex
    # Relative to the font definition, without the `.png` extension.
    source: Path


class FontDefinition(BaseModel):
    # Only zero is accepted by fontlibc.
    version: U8 = 0
    # Height in pixels, not including space above/below.
    height: U8 = 0
    # Cursor moves left this much after each glyph; total movement is width - overhang.
    italic_space_adjust: U8 = 0
    space_above: U8 = 0
    space_below: U8 = 0
    weight: Optional[FontWeight] = None
    style: FontStyle = Field(default_factory=FontStyle)
    # Vertical alignment helpers, counted in pixels down from the top of the glyph.
    cap_height: U8 = 0
    x_height: U8 = 0
    baseline_height: U8 = 0
    glyphs: List[FontGlyph] = Field(default_factory=list)

    @property
    def weight_code(self) -> int:
        return self.weight.code if self.weight is not None else 0
