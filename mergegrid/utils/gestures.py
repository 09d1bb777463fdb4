"""
Translate touch gestures into directions.
"""

from mergegrid.core.directions import Direction

# ##>: Minimal length of a swipe, in screen units.
SENSITIVITY = 3.0


def detect_swipe(
    start: tuple[float, float], end: tuple[float, float], sensitivity: float = SENSITIVITY
) -> Direction | None:
    """
    Find the direction of a swipe from the points where the touch started and ended.

    Parameters
    ----------
    start : tuple[float, float]
        Screen position ``(x, y)`` where the touch started, ``y`` growing downward.
    end : tuple[float, float]
        Screen position ``(x, y)`` where the touch ended.
    sensitivity : float, optional
        Gestures shorter than this on both axes are not swipes.

    Returns
    -------
    Direction | None
        The direction of the swipe, None for a tap or a too short gesture.
    """
    delta_x = start[0] - end[0]
    delta_y = start[1] - end[1]
    if abs(delta_x) < sensitivity and abs(delta_y) < sensitivity:
        return None

    if abs(delta_x) > abs(delta_y):
        return Direction.LEFT if delta_x > 0 else Direction.RIGHT
    return Direction.UP if delta_y > 0 else Direction.DOWN
