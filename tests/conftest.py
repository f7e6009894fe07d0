import logging
import os
from pathlib import Path
from typing import Iterable, Tuple

import pytest
from PIL import Image


@pytest.fixture(autouse=True)
def _clean_tiasset_env(monkeypatch):
    # Keep configuration deterministic regardless of the caller's shell
    for key in list(os.environ):
        if key.startswith("TIASSET_"):
            monkeypatch.delenv(key, raising=False)
    tiasset_logger = logging.getLogger("tiasset")
    level = tiasset_logger.level
    yield
    tiasset_logger.setLevel(level)


@pytest.fixture()
def write_glyph_png():
    """
    Writes a luminance+alpha PNG where `rows` are strings of '#' (opaque)
    and '.' (transparent).
    """

    def _write(path: Path, rows: Iterable[str]) -> Path:
        rows = list(rows)
        image = Image.new("LA", (len(rows[0]), len(rows)), (0, 0))
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch == "#":
                    image.putpixel((x, y), (0, 255))
        path.parent.mkdir(parents=True, exist_ok=True)
        image.save(path, format="PNG")
        return path

    return _write


@pytest.fixture()
def write_rgb_png():
    def _write(path: Path, pixels: Iterable[Iterable[Tuple[int, int, int]]]) -> Path:
        pixels = [list(row) for row in pixels]
        image = Image.new("RGB", (len(pixels[0]), len(pixels)))
        for y, row in enumerate(pixels):
            for x, color in enumerate(row):
                image.putpixel((x, y), color)
        path.parent.mkdir(parents=True, exist_ok=True)
        image.save(path, format="PNG")
        return path

    return _write
