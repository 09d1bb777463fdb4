"""
Move engine for the grid: legality of a move, compaction and merge of the tiles, and
the post-move resolution of merges.

Every function works on groups of cells where tiles travel toward the end of the group,
so the same code serves the four directions (see ``groups_for``).
"""

import logging
from collections.abc import Sequence

from mergegrid.core.directions import Direction, groups_for
from mergegrid.core.grid import Grid
from mergegrid.core.tiles import Cell, Tile

logger = logging.getLogger(__name__)

Group = Sequence[Cell]


def can_move(groups: Sequence[Group]) -> bool:
    """
    Check if any tile of the groups can slide or merge.

    Parameters
    ----------
    groups : Sequence[Group]
        Groups of cells, destination at the end of each group.

    Returns
    -------
    bool
        True on the first tile that has an empty cell or an equal tile ahead of it.
    """
    for group in groups:
        for i in range(len(group) - 2, -1, -1):
            current = group[i]
            if current.tile is None:
                continue

            for j in range(i + 1, len(group)):
                ahead = group[j]
                if ahead.tile is None:
                    return True
                if ahead.tile.value == current.tile.value:
                    return True
                break
    return False


def _merge(source: Cell, destination: Cell) -> Tile:
    """Put the source tile in place of the destination tile and return the consumed one."""
    consumed = destination.tile
    destination.tile = source.tile
    destination.merged = True
    source.tile = None
    return consumed


def apply_move(grid: Grid, groups: Sequence[Group]) -> bool:
    """
    Slide and merge the tiles of the groups.

    Parameters
    ----------
    grid : Grid
        Grid owning the cells, notified of the tiles consumed by a merge.
    groups : Sequence[Group]
        Groups of cells, destination at the end of each group.

    Returns
    -------
    bool
        True if at least one tile moved or merged.

    Notes
    -----
    - Tiles are processed from the one nearest the destination to the farthest.
    - A tile slides to the farthest empty cell before the first obstacle.
    - A cell flagged as merged stops the scan: a tile produced by a merge cannot merge
      again during the same move.
    - Values are not doubled here, see ``resolve_merges``.
    """
    changed = False
    consumed: list[tuple[Tile, Cell]] = []
    for group in groups:
        for i in range(len(group) - 2, -1, -1):
            current = group[i]
            if current.tile is None:
                continue

            target = None
            for j in range(i + 1, len(group)):
                ahead = group[j]
                if ahead.merged:
                    break
                if ahead.tile is not None:
                    if ahead.tile.value == current.tile.value:
                        consumed.append((_merge(current, ahead), ahead))
                        target = None
                        changed = True
                    break
                target = ahead

            if target is not None:
                target.tile = current.tile
                current.tile = None
                changed = True

    # ##>: Listeners only run once every tile of the move is in place.
    for tile, cell in consumed:
        grid.notify_removed(tile, cell)
    return changed


def resolve_merges(grid: Grid) -> int:
    """
    Double the tiles produced by merges and clear the merge flags.

    Parameters
    ----------
    grid : Grid
        The grid after ``apply_move``.

    Returns
    -------
    int
        Sum of the doubled values, to add to the score.
    """
    gained = 0
    for cell in grid:
        if cell.tile is not None and cell.merged:
            gained += cell.tile.double()
        cell.merged = False
    return gained


def legal_directions(grid: Grid) -> list[Direction]:
    """Directions in which a move changes the grid."""
    return [direction for direction in Direction if can_move(groups_for(grid, direction))]


def has_any_move(grid: Grid) -> bool:
    """
    Check if a move is possible in at least one direction.

    Returns
    -------
    bool
        False when the game is over.
    """
    return any(can_move(groups_for(grid, direction)) for direction in Direction)


def move(grid: Grid, direction: Direction | int) -> tuple[bool, int]:
    """
    Play one move on the grid, without spawning a new tile.

    Parameters
    ----------
    grid : Grid
        The grid to update in place.
    direction : Direction | int
        Direction of the move, or its action number.

    Returns
    -------
    moved : bool
        False when the move is illegal; the grid is then left untouched.
    gained : int
        Score obtained from the merges of the move.
    """
    direction = Direction(direction)
    if not can_move(groups_for(grid, direction)):
        logger.debug('Cannot move %s', direction.name.lower())
        return False, 0

    logger.debug('Move %s', direction.name.lower())
    try:
        apply_move(grid, groups_for(grid, direction))
    finally:
        gained = resolve_merges(grid)
    return True, gained
