"""Exceptions raised by the grid and the move engine."""


class MergeGridError(Exception):
    """Base class for all errors raised by the game engine."""


class InvalidDirectionError(MergeGridError, ValueError):
    """The input adapter supplied something that is not a direction."""


class NoEmptyCellError(MergeGridError, RuntimeError):
    """A tile was requested on a grid without any free cell."""


class OutOfBoundsError(MergeGridError, IndexError):
    """A cell was looked up with coordinates outside the grid."""
