from __future__ import annotations

from pathlib import Path
from typing import List, NamedTuple, Tuple

from PIL import Image, UnidentifiedImageError

from tiasset.core.errors import ImageLoadError


class ColorRGB24(NamedTuple):
    red: int
    green: int
    blue: int


def to_color8(color: ColorRGB24) -> int:
    """Maps a 24-bit colour onto the 8-bit 3-3-2 palette."""
    red, green, blue = color
    return ((red // 32) << 5) | (green // 32) | ((blue // 64) << 3)


class RawImage:
    def __init__(self, image: Image.Image):
        self.image = image

    @classmethod
    def load(cls, path: Path) -> "RawImage":
        try:
            with Image.open(path) as opened:
                if opened.format != "PNG":
                    raise ImageLoadError(f"Failed to parse PNG: {path} is {opened.format or 'unknown'} data")
                opened.load()
                image = opened.copy()
        except FileNotFoundError as exc:
            raise ImageLoadError(f"Failed to read image file at: {path}") from exc
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise ImageLoadError(f"Failed to parse PNG: {path}: {exc}") from exc
        return cls(image)

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self.image.size

    def into_rgb24(self) -> Tuple[int, int, List[ColorRGB24]]:
        """Returns the width, height, and pixel data of the image."""
        width, height = self.image.size
        raw = self.image.convert("RGB").tobytes()
        pixels = [ColorRGB24(raw[i], raw[i + 1], raw[i + 2]) for i in range(0, len(raw), 3)]
        return width, height, pixels

    def into_monochrome(self) -> Tuple[int, int, List[bool]]:
        """Returns the width, height, and pixel data of the image; a pixel is set when not transparent."""
        width, height = self.image.size
        alpha = self.image.convert("LA").getchannel("A").tobytes()
        return width, height, [a != 0 for a in alpha]
