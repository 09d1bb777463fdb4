"""
Cell and tile records shared by the grid and the move engine.
"""

from dataclasses import dataclass, field
from itertools import count

# ##>: Unique tile identifiers, so a renderer can follow a tile across cells.
_TILE_IDS = count(1)


@dataclass(eq=False)
class Tile:
    """
    A numbered tile sitting in exactly one cell.

    Attributes
    ----------
    value : int
        A power of two. Only ever changes by doubling after a merge.
    uid : int
        Identifier unique for the lifetime of the process.
    """

    value: int
    uid: int = field(default_factory=lambda: next(_TILE_IDS))

    def double(self) -> int:
        """Double the value of the tile and return the new value."""
        self.value *= 2
        return self.value


@dataclass(eq=False)
class Cell:
    """
    A fixed position of the grid.

    Attributes
    ----------
    x : int
        Column index, from left to right.
    y : int
        Row index, from top to bottom.
    tile : Tile | None
        The tile occupying the cell, if any.
    merged : bool
        Set when the tile of the cell was produced by a merge during the current move.
    """

    x: int
    y: int
    tile: Tile | None = None
    merged: bool = False

    @property
    def is_empty(self) -> bool:
        """True when no tile occupies the cell."""
        return self.tile is None

    def __repr__(self) -> str:
        value = self.tile.value if self.tile is not None else None
        return f'Cell(x={self.x}, y={self.y}, value={value}, merged={self.merged})'
