from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Hashable, Mapping

from tiasset.core.errors import SerialError

if TYPE_CHECKING:
    from .builder import SerialSectorBuilder

log = logging.getLogger("tiasset.serial")


class SerialTracker:
    """Caches the absolute starting offset of every sector."""

    def __init__(self, sectors: Mapping[Hashable, "SerialSectorBuilder"]):
        self._sector_offsets: Dict[Hashable, int] = {}

        offset = 0
        for sector_id, sector in sectors.items():
            self._sector_offsets[sector_id] = offset
            for field in sector.fields:
                offset += field.size(offset, self)

        self.total_size = offset
        log.debug("Tracked %d sectors, %d bytes", len(self._sector_offsets), offset)

    def sector_offset(self, sector: Hashable) -> int:
        try:
            return self._sector_offsets[sector]
        except KeyError:
            raise SerialError(f"Sector does not exist: {sector!r}") from None

    def offset_from_origin(self, origin: Hashable) -> int:
        try:
            return self._sector_offsets[origin]
        except KeyError:
            raise SerialError(f"Failed to find origin; was likely in front or missing: {origin!r}") from None

    def offset_field_from_sector(
        self,
        from_sector: Hashable,
        to_sector: Hashable,
        to_index: int,
        sectors: Mapping[Hashable, "SerialSectorBuilder"],
    ) -> int:
        from_offset = self.sector_offset(from_sector)
        to_offset = self.sector_offset(to_sector)
        if to_offset < from_offset:
            raise SerialError(f"From sector was ahead of to sector: {from_offset} > {to_offset}")

        fields = sectors[to_sector].fields
        if to_index < 0 or (to_index >= len(fields) and to_index != 0):
            raise SerialError(
                f"Can't index into sector; not enough fields. "
                f"Sector: {to_sector!r}, Length: {len(fields)}, Index: {to_index}"
            )

        offset = to_offset
        for field in fields[:to_index]:
            offset += field.size(offset, self)

        return offset - from_offset
