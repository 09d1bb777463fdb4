"""
Movement directions and their translation into groups of cells.
"""

from enum import IntEnum

from mergegrid.core.errors import InvalidDirectionError
from mergegrid.core.grid import Grid
from mergegrid.core.tiles import Cell


class Direction(IntEnum):
    """The four moves, numbered like the actions of the simulator (0: left, 1: up, 2: right, 3: down)."""

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3


# ##>: Key names sent by matplotlib and by browsers, plus plain direction names.
KEY_BINDINGS: dict[str, Direction] = {
    'left': Direction.LEFT,
    'up': Direction.UP,
    'right': Direction.RIGHT,
    'down': Direction.DOWN,
    'arrowleft': Direction.LEFT,
    'arrowup': Direction.UP,
    'arrowright': Direction.RIGHT,
    'arrowdown': Direction.DOWN,
}


def parse_direction(value: object) -> Direction | None:
    """
    Translate an input into a direction.

    Parameters
    ----------
    value : object
        A ``Direction``, an action number, a key or direction name, or None / empty string
        for "no direction".

    Returns
    -------
    Direction | None
        The direction, None for a noop.

    Raises
    ------
    InvalidDirectionError
        If the value is not a recognised direction.
    """
    if value is None or value == '':
        return None
    if isinstance(value, Direction):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value < len(Direction):
            return Direction(value)
    elif isinstance(value, str):
        direction = KEY_BINDINGS.get(value.strip().lower())
        if direction is not None:
            return direction
    raise InvalidDirectionError(f'Unknown direction: {value!r}')


def groups_for(grid: Grid, direction: Direction) -> list[list[Cell]]:
    """
    Build the groups of cells a move in the given direction works on.

    Tiles always travel toward the end of each group.

    Parameters
    ----------
    grid : Grid
        The grid to group.
    direction : Direction
        Direction of the move.

    Returns
    -------
    list[list[Cell]]
        Fresh groups, one per row or column.
    """
    if direction == Direction.UP:
        return grid.groups_by_column(reversed=True)
    if direction == Direction.DOWN:
        return grid.groups_by_column(reversed=False)
    if direction == Direction.LEFT:
        return grid.groups_by_row(reversed=True)
    if direction == Direction.RIGHT:
        return grid.groups_by_row(reversed=False)
    raise InvalidDirectionError(f'Unknown direction: {direction!r}')
