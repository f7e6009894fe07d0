from __future__ import annotations

from tiasset.core.errors import DefinitionError

FONT_PACK_HEADER = b"FONTPACK"
MAX_FONTS_LENGTH = 127


def get_fonts_length(length: int) -> int:
    """Clamps the number of fonts to [1, 127]."""
    if length == 0:
        raise DefinitionError("There must be at least one font in a pack.")
    if length > MAX_FONTS_LENGTH:
        raise DefinitionError(f"There can't be more than {MAX_FONTS_LENGTH} fonts in a pack.")
    return length
