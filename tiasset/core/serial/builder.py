from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Dict, Hashable, Iterable, List, Union

from .field import (
    BytesField,
    DynamicField,
    ExternalField,
    FillField,
    IntegerField,
    ScaleRounding,
    StringField,
)
from .tracker import SerialTracker

log = logging.getLogger("tiasset.serial")

SerialField = Union[BytesField, DynamicField, ExternalField, FillField, IntegerField, StringField]


class SerialSectorBuilder:
    """Ordered list of fields; every method returns the builder so calls chain."""

    def __init__(self) -> None:
        self.fields: List[SerialField] = []

    def __repr__(self) -> str:
        return f"SerialSectorBuilder(fields={self.fields!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SerialSectorBuilder) and self.fields == other.fields

    def field(self, field: SerialField) -> "SerialSectorBuilder":
        self.fields.append(field)
        return self

    def string(self, value: str) -> "SerialSectorBuilder":
        return self.field(StringField(value))

    def bytes(self, value: Iterable[int]) -> "SerialSectorBuilder":
        return self.field(BytesField(bytes(value)))

    def u8(self, value: int) -> "SerialSectorBuilder":
        return self.field(IntegerField(value, 1))

    def i8(self, value: int) -> "SerialSectorBuilder":
        return self.field(IntegerField(value, 1, signed=True))

    def u16(self, value: int) -> "SerialSectorBuilder":
        return self.field(IntegerField(value, 2))

    def i16(self, value: int) -> "SerialSectorBuilder":
        return self.field(IntegerField(value, 2, signed=True))

    def u24(self, value: int) -> "SerialSectorBuilder":
        return self.field(IntegerField(value, 3))

    def u32(self, value: int) -> "SerialSectorBuilder":
        return self.field(IntegerField(value, 4))

    def i32(self, value: int) -> "SerialSectorBuilder":
        return self.field(IntegerField(value, 4, signed=True))

    def u64(self, value: int) -> "SerialSectorBuilder":
        return self.field(IntegerField(value, 8))

    def i64(self, value: int) -> "SerialSectorBuilder":
        return self.field(IntegerField(value, 8, signed=True))

    def null_8(self) -> "SerialSectorBuilder":
        return self.u8(0)

    def null_16(self) -> "SerialSectorBuilder":
        return self.u16(0)

    def null_24(self) -> "SerialSectorBuilder":
        return self.u24(0)

    def null_32(self) -> "SerialSectorBuilder":
        return self.u32(0)

    def null_64(self) -> "SerialSectorBuilder":
        return self.u64(0)

    def _dynamic(self, width, origin, sector, index, scale, rounding) -> "SerialSectorBuilder":
        return self.field(DynamicField(origin, sector, index, width, scale=scale, rounding=ScaleRounding(rounding)))

    def dynamic_u8(self, origin: Hashable, sector: Hashable, index: int = 0, scale: int = 1,
                   rounding: ScaleRounding = ScaleRounding.EXACT) -> "SerialSectorBuilder":
        return self._dynamic(1, origin, sector, index, scale, rounding)

    def dynamic_u16(self, origin: Hashable, sector: Hashable, index: int = 0, scale: int = 1,
                    rounding: ScaleRounding = ScaleRounding.EXACT) -> "SerialSectorBuilder":
        return self._dynamic(2, origin, sector, index, scale, rounding)

    def dynamic_u24(self, origin: Hashable, sector: Hashable, index: int = 0, scale: int = 1,
                    rounding: ScaleRounding = ScaleRounding.EXACT) -> "SerialSectorBuilder":
        return self._dynamic(3, origin, sector, index, scale, rounding)

    def dynamic_u32(self, origin: Hashable, sector: Hashable, index: int = 0, scale: int = 1,
                    rounding: ScaleRounding = ScaleRounding.EXACT) -> "SerialSectorBuilder":
        return self._dynamic(4, origin, sector, index, scale, rounding)

    def fill(self, origin: Hashable, fill: int) -> "SerialSectorBuilder":
        return self.field(FillField(origin, fill))

    def external(self, path: Union[str, Path], size: int) -> "SerialSectorBuilder":
        return self.field(ExternalField(Path(path), size))


class SerialBuilder:
    """
    Lays out named sectors back to back.

    Sector offsets are tracked before anything is written, so dynamic
    pointers may reference sectors that come later in the output.
    """

    def __init__(self) -> None:
        self.sectors: Dict[Hashable, SerialSectorBuilder] = {}

    def __repr__(self) -> str:
        return f"SerialBuilder(sectors={self.sectors!r})"

    def sector(self, key: Hashable, builder: SerialSectorBuilder) -> "SerialBuilder":
        self.sectors[key] = builder
        return self

    def sector_default(self, key: Hashable) -> "SerialBuilder":
        return self.sector(key, SerialSectorBuilder())

    def tracker(self) -> SerialTracker:
        return SerialTracker(self.sectors)

    def build(self, buffer: BinaryIO) -> None:
        tracker = self.tracker()
        base = buffer.tell()

        for sector_id, sector in self.sectors.items():
            for field in sector.fields:
                field.write(buffer, base, self.sectors, tracker)
            log.debug("Built sector: %r", sector_id)

        buffer.flush()

    def build_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.build(buffer)
        return buffer.getvalue()
