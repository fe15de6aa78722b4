"""Rectangular block of the pixel grid."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Block:
    """One tile of the grid. Edge tiles may be smaller than the block size."""

    x: int
    y: int
    width: int
    height: int
    row: int = 0
    col: int = 0

    @property
    def slices(self) -> Tuple[slice, slice]:
        """Row and column slices of the footprint, for numpy indexing."""
        return slice(self.y, self.y + self.height), slice(self.x, self.x + self.width)

    @property
    def area(self) -> int:
        return self.width * self.height
