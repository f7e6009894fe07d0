from __future__ import annotations

import io
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Hashable, Mapping

from tiasset.core.errors import SerialError

if TYPE_CHECKING:
    from .builder import SerialSectorBuilder
    from .tracker import SerialTracker


class ScaleRounding(str, Enum):
    EXACT = "exact"
    DOWN = "down"
    UP = "up"


@dataclass(frozen=True)
class IntegerField:
    value: int
    width: int
    signed: bool = False

    def __post_init__(self) -> None:
        bits = self.width * 8
        low, high = (-(1 << (bits - 1)), (1 << (bits - 1)) - 1) if self.signed else (0, (1 << bits) - 1)
        if not low <= self.value <= high:
            kind = "signed" if self.signed else "unsigned"
            raise SerialError(f"Value {self.value} does not fit in a {kind} {bits}-bit field: [{low}, {high}]")

    def size(self, offset: int, tracker: "SerialTracker") -> int:
        return self.width

    def write(self, buffer: BinaryIO, base: int, sectors: Mapping, tracker: "SerialTracker") -> None:
        buffer.write(self.value.to_bytes(self.width, "little", signed=self.signed))


@dataclass(frozen=True)
class StringField:
    """Null terminated string."""

    value: str

    @property
    def encoded(self) -> bytes:
        return self.value.encode("utf-8")

    def size(self, offset: int, tracker: "SerialTracker") -> int:
        # NUL terminator
        return len(self.encoded) + 1

    def write(self, buffer: BinaryIO, base: int, sectors: Mapping, tracker: "SerialTracker") -> None:
        buffer.write(self.encoded)
        buffer.write(b"\x00")


@dataclass(frozen=True)
class BytesField:
    value: bytes

    def size(self, offset: int, tracker: "SerialTracker") -> int:
        return len(self.value)

    def write(self, buffer: BinaryIO, base: int, sectors: Mapping, tracker: "SerialTracker") -> None:
        buffer.write(self.value)


@dataclass(frozen=True)
class DynamicField:
    """
    Pointer to a field that is only placed at build time.

    The value is the offset of field `index` of `sector`, counted from the
    start of sector `origin`, divided by `scale`.
    """

    origin: Hashable
    sector: Hashable
    index: int
    width: int
    scale: int = 1
    rounding: ScaleRounding = ScaleRounding.EXACT

    def __post_init__(self) -> None:
        if self.scale < 1:
            raise SerialError(f"Dynamic pointer scale must be positive; got {self.scale}")

    def size(self, offset: int, tracker: "SerialTracker") -> int:
        return self.width

    def resolve(self, sectors: Mapping[Hashable, "SerialSectorBuilder"], tracker: "SerialTracker") -> int:
        pointer = tracker.offset_field_from_sector(self.origin, self.sector, self.index, sectors)
        remainder = pointer % self.scale

        if self.rounding == ScaleRounding.EXACT and remainder:
            raise SerialError(
                f"Dynamic pointer isn't aligned to scale: {pointer} % {self.scale} != 0, off by {remainder}"
            )

        value = pointer // self.scale
        if self.rounding == ScaleRounding.UP and remainder:
            value += 1

        limit = (1 << (self.width * 8)) - 1
        if value > limit:
            raise SerialError(f"Pointer exceeds {self.width * 8}-bit limit: {value} > {limit}")
        return value

    def write(self, buffer: BinaryIO, base: int, sectors: Mapping, tracker: "SerialTracker") -> None:
        buffer.write(self.resolve(sectors, tracker).to_bytes(self.width, "little"))


@dataclass(frozen=True)
class FillField:
    """Skips forward until the position is `fill` bytes past the start of `origin`."""

    origin: Hashable
    fill: int

    def size(self, offset: int, tracker: "SerialTracker") -> int:
        return fill_size(offset, tracker.offset_from_origin(self.origin), self.fill)

    def write(self, buffer: BinaryIO, base: int, sectors: Mapping, tracker: "SerialTracker") -> None:
        offset = buffer.tell() - base
        amount = fill_size(offset, tracker.offset_from_origin(self.origin), self.fill)
        buffer.seek(amount, io.SEEK_CUR)


@dataclass(frozen=True)
class ExternalField:
    """File loaded at build time; `size` is checked against what is read."""

    path: Path
    size_bytes: int

    def size(self, offset: int, tracker: "SerialTracker") -> int:
        return self.size_bytes

    def write(self, buffer: BinaryIO, base: int, sectors: Mapping, tracker: "SerialTracker") -> None:
        try:
            data = Path(self.path).read_bytes()
        except OSError as exc:
            raise SerialError(f"Failed to read external file {self.path}: {exc}") from exc

        if len(data) != self.size_bytes:
            raise SerialError(
                "External file has incorrect file size:\n"
                f"Expected: {self.size_bytes} bytes, Found: {len(data)} bytes\n"
                f"Path: {self.path}"
            )
        buffer.write(data)


def fill_size(offset: int, origin_position: int, fill: int) -> int:
    fill_start = offset - origin_position
    if fill_start < 0:
        raise SerialError(
            f"Failed to serialize; current position is before fill origin: {offset} < {origin_position}"
        )
    if fill_start > fill:
        raise SerialError(f"Failed to serialize; fill start is past fill amount: {fill_start} > {fill}")
    return fill - fill_start
