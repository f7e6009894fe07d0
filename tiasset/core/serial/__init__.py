from .builder import SerialBuilder, SerialField, SerialSectorBuilder
from .field import ScaleRounding
from .tracker import SerialTracker

__all__ = [
    "SerialBuilder",
    "SerialField",
    "SerialSectorBuilder",
    "SerialTracker",
    "ScaleRounding",
]
