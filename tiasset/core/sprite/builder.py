from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from pydantic import BaseModel

from tiasset.core.definitions import canonical_definition_path, load_definition, relative_parent_suffix
from tiasset.core.errors import DefinitionError
from tiasset.core.output.formats import OutputType, write_asset
from tiasset.core.serial import SerialBuilder, SerialSectorBuilder

from .image import RawImage, to_color8

log = logging.getLogger("tiasset.sprite")


class SpriteDefinition(BaseModel):
    # Relative to the sprite definition, without the `.png` extension.
    source: Path


def get_sprite_image_path(definition: Path, source: Path) -> Path:
    return relative_parent_suffix(definition, source, ".png")


def generate_serial_builder(image: RawImage) -> SerialBuilder:
    """gfx_sprite_t layout: u8 width, u8 height, then one 8-bit colour per pixel."""
    width, height, pixels = image.into_rgb24()
    for name, value in (("width", width), ("height", height)):
        if not 1 <= value <= 255:
            raise DefinitionError(f"Sprite {name} must be within range [1, 255]. Found {name}: {value}")

    return (
        SerialBuilder()
        .sector("header", SerialSectorBuilder().u8(width).u8(height))
        .sector("data", SerialSectorBuilder().bytes(to_color8(p) for p in pixels))
    )


def build_sprite(
    definition: Union[str, Path],
    output: Union[str, Path],
    output_type: OutputType = OutputType.BINARY,
) -> Path:
    definition_path = canonical_definition_path(definition)
    sprite = load_definition(definition_path, "sprite", SpriteDefinition)
    image_path = get_sprite_image_path(definition_path, sprite.source)
    image = RawImage.load(image_path)
    log.debug("Loaded sprite image %s (%dx%d)", image_path, *image.dimensions)
    data = generate_serial_builder(image).build_bytes()
    return write_asset(output, data, output_type, default_stem=definition_path.stem)
