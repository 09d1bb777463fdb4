# -*- coding: utf-8 -*-
"""
This module provides the grid and the move engine of the 2048 game.

It includes the cells and tiles of the grid, the grouping of cells by direction, the legality
check of a move, the slide and merge of the tiles, the resolution of merges and the detection
of the end of the game.
"""

from .directions import Direction, groups_for, parse_direction
from .errors import InvalidDirectionError, MergeGridError, NoEmptyCellError, OutOfBoundsError
from .gamemove import apply_move, can_move, has_any_move, legal_directions, move, resolve_merges
from .grid import TILE_SPAWN_PROBS, Grid
from .tiles import Cell, Tile

__all__ = [
    "Cell",
    "Tile",
    "Grid",
    "TILE_SPAWN_PROBS",
    "Direction",
    "groups_for",
    "parse_direction",
    "can_move",
    "apply_move",
    "resolve_merges",
    "has_any_move",
    "legal_directions",
    "move",
    "MergeGridError",
    "InvalidDirectionError",
    "NoEmptyCellError",
    "OutOfBoundsError",
]
