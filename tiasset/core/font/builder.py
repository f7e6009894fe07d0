from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple, Union

from tiasset.core.definitions import canonical_definition_path, load_definition, resolve_reference
from tiasset.core.output.formats import OutputType, write_asset

from .definition import FontDefinition, FontPackDefinition
from .glyphs import FontGlyphs
from .output import bin as bin_output

log = logging.getLogger("tiasset.font")


def load_pack_definition(path: Path) -> FontPackDefinition:
    return load_definition(path, "pack", FontPackDefinition)


def load_font_definition(path: Path) -> FontDefinition:
    return load_definition(path, "font", FontDefinition)


def get_font_path(pack: Path, font: Path) -> Path:
    return resolve_reference(pack, font)


def load_fonts(pack_path: Path, pack: FontPackDefinition) -> List[Tuple[FontDefinition, FontGlyphs]]:
    fonts = []
    for font_ref in pack.fonts:
        font_path = get_font_path(pack_path, font_ref)
        font = load_font_definition(font_path)
        glyphs = FontGlyphs.from_definition(font_path, font.glyphs, height=font.height)
        log.debug("Loaded font %s with %d glyphs", font_path, len(glyphs.glyphs))
        fonts.append((font, glyphs))
    return fonts


def build_font_pack(
    definition: Union[str, Path],
    output: Union[str, Path],
    output_type: OutputType = OutputType.BINARY,
) -> Path:
    """Builds the font pack at `definition` and writes it to `output`."""
    pack_path = canonical_definition_path(definition)
    pack = load_pack_definition(pack_path)
    fonts = load_fonts(pack_path, pack)
    data = bin_output.build_bytes(pack, fonts)
    return write_asset(output, data, output_type, default_stem=pack_path.stem)
