from itertools import product
from unittest import TestCase, main

import numpy as np

from mergegrid.core.directions import Direction, groups_for
from mergegrid.core.gamemove import apply_move, can_move, has_any_move, legal_directions, move, resolve_merges
from mergegrid.core.grid import Grid


def values(group):
    return [cell.tile.value if cell.tile is not None else 0 for cell in group]


class TestGroupMove(TestCase):
    """
    Moves on a single group, destination at the end of the group.
    """

    def setUp(self):
        self.grid = Grid(size=4, seed=0)

    def play_row(self, row):
        self.grid.from_array([row, [0] * 4, [0] * 4, [0] * 4])
        groups = self.grid.groups_by_row()
        apply_move(self.grid, groups)
        gained = resolve_merges(self.grid)
        return values(self.grid.groups_by_row()[0]), gained

    def test_merge_pair(self):
        row, gained = self.play_row([0, 0, 2, 2])
        self.assertEqual(row, [0, 0, 0, 4])
        self.assertEqual(gained, 4)

    def test_slide_without_merge(self):
        row, gained = self.play_row([4, 0, 2, 0])
        self.assertEqual(row, [0, 0, 4, 2])
        self.assertEqual(gained, 0)

    def test_already_compacted(self):
        row, _ = self.play_row([0, 0, 2, 4])
        self.assertEqual(row, [0, 0, 2, 4])
        self.assertFalse(can_move([self.grid.groups_by_row()[0]]))

    def test_no_double_merge(self):
        """
        The tile produced by a merge does not merge again in the same move.
        """
        row, gained = self.play_row([0, 2, 2, 2])
        self.assertEqual(row, [0, 0, 2, 4])
        self.assertEqual(gained, 4)

    def test_merge_chain_stops(self):
        row, gained = self.play_row([4, 4, 8, 0])
        self.assertEqual(row, [0, 0, 8, 8])
        self.assertEqual(gained, 8)

    def test_two_pairs(self):
        row, gained = self.play_row([2, 2, 2, 2])
        self.assertEqual(row, [0, 0, 4, 4])
        self.assertEqual(gained, 8)

    def test_maximal_slide(self):
        """
        A lone tile travels to the far end, not a single step.
        """
        row, _ = self.play_row([8, 0, 0, 0])
        self.assertEqual(row, [0, 0, 0, 8])

    def test_merge_across_gap(self):
        row, gained = self.play_row([2, 0, 0, 2])
        self.assertEqual(row, [0, 0, 0, 4])
        self.assertEqual(gained, 4)

    def test_merge_flags_cleared(self):
        self.play_row([0, 0, 2, 2])
        self.assertTrue(all(not cell.merged for cell in self.grid))

    def test_merge_notifies_removal(self):
        removed = []
        self.grid.add_removal_listener(lambda tile, cell: removed.append((tile.value, cell.x)))
        self.play_row([0, 0, 2, 2])
        self.assertEqual(removed[-1], (2, 3))

    def test_failing_listener_sees_finished_move(self):
        """
        Listeners run after the tiles of the move are in place.
        """
        seen = []

        def broken(tile, cell):
            seen.append(values(self.grid.groups_by_row()[0]))
            raise RuntimeError("renderer failure")

        self.grid.add_removal_listener(broken)
        self.grid.from_array([[2, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4])
        with self.assertRaises(RuntimeError):
            move(self.grid, Direction.RIGHT)

        self.assertEqual(seen, [[0, 0, 0, 2]])
        self.assertEqual(values(self.grid.groups_by_row()[0]), [0, 0, 0, 4])
        self.assertEqual(self.grid.tile_sum(), 4)
        self.assertTrue(all(not cell.merged for cell in self.grid))

    def test_apply_move_reports_change(self):
        self.grid.from_array([[0, 0, 2, 4], [0] * 4, [0] * 4, [0] * 4])
        self.assertFalse(apply_move(self.grid, self.grid.groups_by_row()))
        self.assertTrue(apply_move(self.grid, self.grid.groups_by_row(reversed=True)))


class TestGameMove(TestCase):
    def setUp(self):
        self.grid = Grid(size=4, seed=0)

    def test_direction_mapping(self):
        """
        Each direction pushes the tiles toward its own edge.
        """
        expected = {
            Direction.LEFT: [[4, 0, 0, 0], [0] * 4, [0] * 4, [0] * 4],
            Direction.RIGHT: [[0, 0, 0, 4], [0] * 4, [0] * 4, [0] * 4],
            Direction.UP: [[2, 0, 0, 2], [0] * 4, [0] * 4, [0] * 4],
            Direction.DOWN: [[0] * 4, [0] * 4, [0] * 4, [2, 0, 0, 2]],
        }
        for direction, board in expected.items():
            self.grid.from_array([[2, 0, 0, 2], [0] * 4, [0] * 4, [0] * 4])
            moved, _ = move(self.grid, direction)
            self.assertEqual(moved, direction != Direction.UP)
            np.testing.assert_array_equal(self.grid.to_array(), np.array(board))

    def test_vertical_merge(self):
        self.grid.from_array([[2, 0, 0, 0], [2, 0, 0, 0], [4, 0, 0, 0], [0, 0, 0, 0]])
        moved, gained = move(self.grid, Direction.UP)
        self.assertTrue(moved)
        self.assertEqual(gained, 4)
        np.testing.assert_array_equal(self.grid.to_array()[:, 0], [4, 4, 0, 0])

    def test_action_number(self):
        board = [[2, 0, 0, 0], [0] * 4, [0] * 4, [0] * 4]
        self.grid.from_array(board)
        self.assertEqual(move(self.grid, 0), (False, 0))
        np.testing.assert_array_equal(self.grid.to_array(), np.array(board))
        self.assertEqual(move(self.grid, 2), (True, 0))
        self.assertEqual(self.grid.to_array()[0, 3], 2)

    def test_illegal_move_untouched(self):
        board = [[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]
        self.grid.from_array(board)
        moved, gained = move(self.grid, Direction.LEFT)
        self.assertFalse(moved)
        self.assertEqual(gained, 0)
        np.testing.assert_array_equal(self.grid.to_array(), np.array(board))

    def test_legal_directions(self):
        self.grid.from_array([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.assertEqual(set(legal_directions(self.grid)), {Direction.UP, Direction.RIGHT, Direction.DOWN})

    def test_has_any_move_full_grid(self):
        self.grid.from_array([[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 65536]])
        self.assertFalse(has_any_move(self.grid))
        self.assertEqual(legal_directions(self.grid), [])

    def test_has_any_move_pair(self):
        self.grid.from_array([[2, 2, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 65536]])
        self.assertTrue(has_any_move(self.grid))
        self.assertEqual(set(legal_directions(self.grid)), {Direction.LEFT, Direction.RIGHT})

    def test_has_any_move_empty_cell(self):
        self.grid.from_array([[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 0]])
        self.assertTrue(has_any_move(self.grid))


class TestMoveProperties(TestCase):
    """
    Properties checked over random boards.
    """

    def setUp(self):
        self.grid = Grid(size=4, seed=0)
        self.rng = np.random.default_rng(1234)

    def random_boards(self, count=200):
        for _ in range(count):
            exponents = self.rng.integers(0, 4, size=(4, 4))
            yield np.where(exponents == 0, 0, 2**exponents)

    def test_legality_agrees_with_effect(self):
        for board, direction in product(self.random_boards(), Direction):
            self.grid.from_array(board)
            legal = can_move(groups_for(self.grid, direction))
            changed = apply_move(self.grid, groups_for(self.grid, direction))
            resolve_merges(self.grid)
            self.assertEqual(legal, changed)
            self.assertEqual(legal, not np.array_equal(board, self.grid.to_array()))

    def test_tile_sum_preserved_by_merges(self):
        for board, direction in product(self.random_boards(), Direction):
            self.grid.from_array(board)
            before = self.grid.tile_sum()
            count_before = len(self.grid.occupied_cells())
            _, gained = move(self.grid, direction)
            merges = count_before - len(self.grid.occupied_cells())

            # ##>: Total value is preserved; the score counts each doubled tile.
            self.assertEqual(self.grid.tile_sum(), before)
            self.assertGreaterEqual(gained, 4 * merges)
            self.assertLessEqual(merges, 8)

    def test_no_tile_merges_twice(self):
        for board in self.random_boards():
            for row in board:
                self.grid.from_array([row, [0] * 4, [0] * 4, [0] * 4])
                move(self.grid, Direction.RIGHT)
                result = [value for value in self.grid.to_array()[0] if value]
                expected = [value for value in row if value]
                # ##>: Each output tile is either an input tile or the double of exactly two of them.
                self.assertEqual(sum(result), sum(expected))
                self.assertGreaterEqual(len(result), (len(expected) + 1) // 2)

    def test_terminal_matches_adjacency(self):
        for board in self.random_boards(count=500):
            full = np.where(board == 0, 2 ** self.rng.integers(1, 8, size=(4, 4)), board)
            self.grid.from_array(full)
            stuck = not (np.any(full[:-1] == full[1:]) or np.any(full[:, :-1] == full[:, 1:]))
            self.assertEqual(has_any_move(self.grid), not stuck)


if __name__ == '__main__':
    main()
