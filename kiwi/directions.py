"""The six axis-aligned directions in 3D space."""

from __future__ import annotations

import enum
from typing import Iterator, Optional, Tuple

import numpy as np

_NORMALS = {
    "NORTH": (0, 0, -1),
    "SOUTH": (0, 0, 1),
    "EAST": (1, 0, 0),
    "WEST": (-1, 0, 0),
    "UP": (0, 1, 0),
    "DOWN": (0, -1, 0),
}


class CardinalDirection(enum.Enum):
    """An axis direction; the value is its 3-bit encoding."""

    NORTH = 0b000  # -Z
    SOUTH = 0b001  # +Z
    EAST = 0b010  # +X
    WEST = 0b011  # -X
    UP = 0b100  # +Y
    DOWN = 0b101  # -Y

    def normal(self) -> np.ndarray:
        """The unit normal as a float vector."""
        return np.array(_NORMALS[self.name], dtype=float)

    def normal_i64(self) -> Tuple[int, int, int]:
        """The unit normal as integer components."""
        return _NORMALS[self.name]

    @classmethod
    def iter(cls) -> Iterator["CardinalDirection"]:
        """Iterate north, south, east, west, up, down."""
        return iter(cls)

    @classmethod
    def from_bits(cls, bits: int) -> Optional["CardinalDirection"]:
        """Decode a direction, or return ``None`` for an unused encoding."""
        try:
            return cls(bits)
        except ValueError:
            return None

    def to_bits(self) -> int:
        return self.value