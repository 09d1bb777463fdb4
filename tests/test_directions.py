from unittest import TestCase, main

from mergegrid.core.directions import Direction, groups_for, parse_direction
from mergegrid.core.errors import InvalidDirectionError
from mergegrid.core.grid import Grid
from mergegrid.utils.gestures import detect_swipe


class TestDirections(TestCase):
    def setUp(self):
        self.grid = Grid(size=4)

    def test_action_numbers(self):
        """
        Directions keep the action numbering of the simulator.
        """
        self.assertEqual([int(direction) for direction in Direction], [0, 1, 2, 3])
        self.assertEqual(Direction(1), Direction.UP)

    def test_groups_destination(self):
        """
        The last cell of each group sits on the edge the tiles move toward.
        """
        edges = {
            Direction.UP: lambda cell: cell.y == 0,
            Direction.DOWN: lambda cell: cell.y == 3,
            Direction.LEFT: lambda cell: cell.x == 0,
            Direction.RIGHT: lambda cell: cell.x == 3,
        }
        for direction, on_edge in edges.items():
            groups = groups_for(self.grid, direction)
            self.assertEqual(len(groups), 4)
            self.assertTrue(all(on_edge(group[-1]) for group in groups), direction)
            self.assertFalse(any(on_edge(group[0]) for group in groups), direction)

    def test_parse_direction(self):
        self.assertIs(parse_direction(Direction.LEFT), Direction.LEFT)
        self.assertIs(parse_direction("ArrowUp"), Direction.UP)
        self.assertIs(parse_direction("down"), Direction.DOWN)
        self.assertIs(parse_direction(" RIGHT "), Direction.RIGHT)
        self.assertIs(parse_direction(0), Direction.LEFT)

    def test_parse_noop(self):
        self.assertIsNone(parse_direction(None))
        self.assertIsNone(parse_direction(""))

    def test_parse_invalid(self):
        for value in ("Enter", 4, -1, False, 2.0, ["up"]):
            with self.assertRaises(InvalidDirectionError):
                parse_direction(value)

    def test_invalid_direction_is_value_error(self):
        with self.assertRaises(ValueError):
            parse_direction("north")


class TestSwipe(TestCase):
    def test_horizontal(self):
        self.assertIs(detect_swipe((200, 100), (50, 110)), Direction.LEFT)
        self.assertIs(detect_swipe((50, 100), (200, 90)), Direction.RIGHT)

    def test_vertical(self):
        self.assertIs(detect_swipe((100, 300), (110, 50)), Direction.UP)
        self.assertIs(detect_swipe((100, 50), (90, 300)), Direction.DOWN)

    def test_straight_swipe(self):
        """
        A perfectly horizontal swipe is still a swipe.
        """
        self.assertIs(detect_swipe((0, 0), (40, 0)), Direction.RIGHT)

    def test_tap(self):
        self.assertIsNone(detect_swipe((100, 100), (101, 102)))
        self.assertIsNone(detect_swipe((100, 100), (100, 100)))

    def test_sensitivity(self):
        self.assertIsNone(detect_swipe((0, 0), (8, 0), sensitivity=10))
        self.assertIs(detect_swipe((0, 0), (12, 0), sensitivity=10), Direction.RIGHT)


if __name__ == '__main__':
    main()
