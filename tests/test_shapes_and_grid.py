import unittest

import numpy as np

from falling_blocks.game import Board, Cell, Shape, ShapeKind, ShapeTableError
from falling_blocks.game.shapes import OFFSETS, ROTATION_STATES, lookup_offsets


def fill_row(board, row, tag=Cell.Z, skip=()):
    for col in range(board.width):
        if col not in skip:
            board.grid[row, col] = tag


class TestShapeTable(unittest.TestCase):
    def test_given_table_when_counting_entries_then_each_state_has_four_cells(self):
        self.assertEqual(len(OFFSETS), sum(ROTATION_STATES.values()))
        for (kind, rotation), offsets in OFFSETS.items():
            self.assertLess(rotation, ROTATION_STATES[kind])
            self.assertEqual(len(set(offsets)), 4)

    def test_given_state_counts_when_rotating_then_wraps_modulo_states(self):
        self.assertEqual(Shape(ShapeKind.O).rotated_cw(), Shape(ShapeKind.O, 0))
        self.assertEqual(Shape(ShapeKind.I, 1).rotated_cw(), Shape(ShapeKind.I, 0))
        self.assertEqual(Shape(ShapeKind.S).rotated_ccw(), Shape(ShapeKind.S, 1))
        self.assertEqual(Shape(ShapeKind.J).rotated_ccw(), Shape(ShapeKind.J, 3))
        self.assertEqual(Shape(ShapeKind.T, 3).rotated_cw(), Shape(ShapeKind.T, 0))

    def test_given_rotation_out_of_range_when_looking_up_then_shape_table_error(self):
        with self.assertRaises(ShapeTableError):
            lookup_offsets(ShapeKind.O, 1)
        with self.assertRaises(ShapeTableError):
            Shape(ShapeKind.Z, 2)
        self.assertTrue(issubclass(ShapeTableError, LookupError))

    def test_given_shape_when_asking_tags_then_active_and_ghost_tags_match_kind(self):
        for kind in ShapeKind:
            shape = Shape(kind)
            self.assertEqual(shape.cell_type().kind, kind)
            self.assertFalse(shape.cell_type().is_ghost)
            self.assertEqual(shape.ghost_cell_type().kind, kind)
            self.assertTrue(shape.ghost_cell_type().is_ghost)
        self.assertIsNone(Cell.EMPTY.kind)

    def test_given_preview_offsets_then_fit_in_two_by_four_box(self):
        for kind in ShapeKind:
            for row, col in Shape(kind).preview_offsets():
                self.assertIn(row, (0, 1))
                self.assertIn(col, range(4))

    def test_given_debug_cycle_then_visits_all_shapes_in_order(self):
        shape = Shape(ShapeKind.I)
        seen = []
        for _ in range(7):
            shape = shape.next_in_cycle()
            seen.append(shape.kind)
        self.assertEqual(seen, [ShapeKind.J, ShapeKind.L, ShapeKind.O, ShapeKind.S, ShapeKind.T, ShapeKind.Z, ShapeKind.I])


class TestBoard(unittest.TestCase):
    def test_given_new_board_then_ten_by_twenty_and_empty(self):
        board = Board()
        self.assertEqual(board.grid.shape, (20, 10))
        self.assertEqual(board.filled_cells(), 0)
        self.assertTrue(board.can_place([(0, 0), (19, 9)]))

    def test_given_out_of_bounds_or_occupied_cells_when_can_place_then_false(self):
        board = Board()
        board.grid[3, 3] = Cell.T
        self.assertFalse(board.can_place([(-1, 0)]))
        self.assertFalse(board.can_place([(20, 0)]))
        self.assertFalse(board.can_place([(0, 10)]))
        self.assertFalse(board.can_place([(0, -1)]))
        self.assertFalse(board.can_place([(3, 3)]))
        with self.assertRaises(IndexError):
            board.cell(20, 0)

    def test_given_cells_when_locking_then_only_those_cells_change(self):
        board = Board()
        before = board.clone_state()
        cells = [(18, 0), (19, 0), (19, 1), (19, 2)]
        board.lock(cells, Cell.L)
        changed = {tuple(int(v) for v in rc) for rc in np.argwhere(board.grid != before)}
        self.assertEqual(changed, set(cells))
        for row, col in cells:
            self.assertEqual(board.cell(row, col), Cell.L)

    def test_given_full_row_five_when_clearing_then_rows_above_shift_down(self):
        board = Board()
        for row in range(20):
            board.grid[row, row % 10] = Cell.I  # one marker per row
        fill_row(board, 5)
        before = board.clone_state()

        self.assertEqual(board.clear_full_rows(), 1)
        np.testing.assert_array_equal(board.grid[1:6], before[0:5])
        self.assertTrue(np.all(board.grid[0] == Cell.EMPTY))
        np.testing.assert_array_equal(board.grid[6:], before[6:])

    def test_given_adjacent_full_rows_when_clearing_then_shifted_full_row_also_cleared(self):
        board = Board()
        fill_row(board, 19)
        fill_row(board, 18)
        fill_row(board, 16)
        board.grid[17, 0] = Cell.O
        board.grid[15, 4] = Cell.S

        self.assertEqual(board.clear_full_rows(), 3)
        self.assertEqual(board.cell(19, 0), Cell.O)
        self.assertEqual(board.cell(18, 4), Cell.S)
        self.assertEqual(board.filled_cells(), 2)

    def test_given_no_full_rows_when_clearing_then_nothing_changes(self):
        board = Board()
        fill_row(board, 19, skip=(3,))
        before = board.clone_state()
        self.assertEqual(board.clear_full_rows(), 0)
        np.testing.assert_array_equal(board.grid, before)


if __name__ == '__main__':
    unittest.main()
