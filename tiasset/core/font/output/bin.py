"""
fontlibc font pack layout.

    Header            "FONTPACK", metadata pointer, font count, font pointers
    Metadata          metadata size, six string pointers (null when unset)
    MetadataStrings   the set strings, NUL terminated
    per font:
      FontHeader      font fields with u16 pointers relative to itself
      FontGlyphWidths one u8 per code point from first to last glyph
      FontGlyphBitmaps one u16 pointer per code point, 0 when unset
      FontGlyphBitmap one sector per set glyph
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Hashable, List, Tuple

from tiasset.core.serial import SerialBuilder, SerialSectorBuilder

from ..definition import FontDefinition, FontPackDefinition
from ..glyphs import FontGlyphs
from . import FONT_PACK_HEADER, get_fonts_length

log = logging.getLogger("tiasset.font")


class Sector(str, Enum):
    HEADER = "header"
    METADATA = "metadata"
    METADATA_END = "metadata_end"
    METADATA_STRINGS = "metadata_strings"
    FONT_HEADER = "font_header"
    FONT_GLYPH_WIDTHS = "font_glyph_widths"
    FONT_GLYPH_BITMAPS = "font_glyph_bitmaps"
    FONT_GLYPH_BITMAP = "font_glyph_bitmap"


def font_sector(kind: Sector, font_index: int, *rest: int) -> Hashable:
    return (kind, font_index, *rest)


def add_font_sectors(
    builder: SerialBuilder,
    font: FontDefinition,
    font_index: int,
    font_glyphs: FontGlyphs,
) -> SerialBuilder:
    header_id = font_sector(Sector.FONT_HEADER, font_index)
    widths = SerialSectorBuilder()
    bitmap_table = SerialSectorBuilder()
    first_glyph = font_glyphs.first_glyph
    glyph_count = font_glyphs.glyph_count()
    glyph_bitmaps: List[Tuple[bytes, int]] = []

    for glyph_index in range(first_glyph, font_glyphs.last_glyph + 1):
        entry = font_glyphs.glyphs.get(glyph_index)
        if entry is None:
            log.debug("Glyph %d of font %d is unset and will be defaulted.", glyph_index, font_index)
            widths.u8(0)
            bitmap_table.null_16()
            continue

        glyph_bitmap, glyph_width = entry
        widths.u8(glyph_width)
        bitmap_table.dynamic_u16(header_id, font_sector(Sector.FONT_GLYPH_BITMAP, font_index, glyph_index), 0)
        glyph_bitmaps.append((glyph_bitmap, glyph_index))

    header = (
        SerialSectorBuilder()
        .u8(font.version)
        .u8(font.height)
        .u8(glyph_count)
        .u8(first_glyph)
        .dynamic_u16(header_id, font_sector(Sector.FONT_GLYPH_WIDTHS, font_index), 0)
        .dynamic_u16(header_id, font_sector(Sector.FONT_GLYPH_BITMAPS, font_index), 0)
        .u8(font.italic_space_adjust)
        .u8(font.space_above)
        .u8(font.space_below)
        .u8(font.weight_code)
        .u8(font.style.to_byte())
        .u8(font.cap_height)
        .u8(font.x_height)
        .u8(font.baseline_height)
    )

    builder.sector(header_id, header)
    builder.sector(font_sector(Sector.FONT_GLYPH_WIDTHS, font_index), widths)
    builder.sector(font_sector(Sector.FONT_GLYPH_BITMAPS, font_index), bitmap_table)

    for glyph_bitmap, glyph_index in glyph_bitmaps:
        builder.sector(
            font_sector(Sector.FONT_GLYPH_BITMAP, font_index, glyph_index),
            SerialSectorBuilder().bytes(glyph_bitmap),
        )

    return builder


def generate_serial_builder(
    pack: FontPackDefinition,
    fonts: List[Tuple[FontDefinition, FontGlyphs]],
) -> SerialBuilder:
    fonts_length = get_fonts_length(len(fonts))

    header = (
        SerialSectorBuilder()
        .bytes(FONT_PACK_HEADER)
        .dynamic_u24(Sector.HEADER, Sector.METADATA, 0)
        .u8(fonts_length)
    )
    # Points to all the fonts in the pack
    for font_index in range(len(fonts)):
        header.dynamic_u24(Sector.HEADER, font_sector(Sector.FONT_HEADER, font_index), 0)

    metadata = SerialSectorBuilder().dynamic_u24(Sector.METADATA, Sector.METADATA_END, 0)
    metadata_strings = SerialSectorBuilder()

    string_index = 0
    for text in pack.metadata.strings():
        if not text:
            metadata.null_24()
            continue
        metadata.dynamic_u24(Sector.HEADER, Sector.METADATA_STRINGS, string_index)
        metadata_strings.string(text)
        string_index += 1

    builder = (
        SerialBuilder()
        .sector(Sector.HEADER, header)
        .sector(Sector.METADATA, metadata)
        .sector_default(Sector.METADATA_END)
        .sector(Sector.METADATA_STRINGS, metadata_strings)
    )

    for font_index, (font, font_glyphs) in enumerate(fonts):
        add_font_sectors(builder, font, font_index, font_glyphs)

    log.debug("%r", builder)
    return builder


def build_bytes(pack: FontPackDefinition, fonts: List[Tuple[FontDefinition, FontGlyphs]]) -> bytes:
    return generate_serial_builder(pack, fonts).build_bytes()
