import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from starbattle.constants import SBN_CODE_TO_DIM_MAP, SBN_B64_ALPHABET
from starbattle.errors import MalformedPuzzleError
from starbattle.walls import (
    WallFlags, grid_size, walls_from_markup, walls_from_region_grid, walls_from_task,
    walls_from_sbn, decode_sbn_header
)

DIM_TO_SBN_CODE = {v: k for k, v in SBN_CODE_TO_DIM_MAP.items()}

L_SHAPES = [
    [1, 1, 2],
    [1, 2, 2],
    [3, 3, 3],
]


def markup_for(region_grid):
    """Builds puzzle page markup carrying 'bt'/'bl' classes on walled cells."""
    dim = len(region_grid)
    cells = []
    for r in range(dim):
        for c in range(dim):
            classes = ""
            if r > 0 and region_grid[r][c] != region_grid[r - 1][c]: classes += " bt"
            if c > 0 and region_grid[r][c] != region_grid[r][c - 1]: classes += " bl"
            cells.append(f'<div tabindex="1" class="cell selectable{classes} cell-off" data-r="{r}"><span></span></div>')
    return '<div class="board">\n' + "\n".join(cells) + '\n</div>'


def sbn_for(region_grid, stars):
    """Encodes a region grid into SBN the same way the puzzle website does."""
    dim = len(region_grid)
    vertical_bits = ['1' if region_grid[r][c] != region_grid[r][c + 1] else '0' for r in range(dim) for c in range(dim - 1)]
    horizontal_bits = ['1' if region_grid[r][c] != region_grid[r + 1][c] else '0' for c in range(dim) for r in range(dim - 1)]
    bitfield = "".join(vertical_bits) + "".join(horizontal_bits)
    bitfield = '0' * ((6 - len(bitfield) % 6) % 6) + bitfield
    data = "".join(SBN_B64_ALPHABET[int(bitfield[i:i + 6], 2)] for i in range(0, len(bitfield), 6))
    return f"{DIM_TO_SBN_CODE[dim]}{stars}W{data}"


class TestGridSize(unittest.TestCase):

    def test_perfect_square(self):
        self.assertEqual(grid_size([WallFlags(False, False)] * 25), 5)

    def test_single_cell(self):
        self.assertEqual(grid_size([WallFlags(True, True)]), 1)

    def test_not_square(self):
        with self.assertRaises(MalformedPuzzleError):
            grid_size([WallFlags(False, False)] * 24)

    def test_empty(self):
        with self.assertRaises(MalformedPuzzleError):
            grid_size([])


class TestRegionGridWalls(unittest.TestCase):

    def test_borders_follow_region_changes(self):
        walls = walls_from_region_grid(L_SHAPES)
        self.assertEqual(len(walls), 9)
        # (0, 1) shares region 1 with its left neighbour; (0, 2) does not.
        self.assertFalse(walls[1].blocked_left)
        self.assertTrue(walls[2].blocked_left)
        # (1, 1) is region 2 under region 1.
        self.assertTrue(walls[4].blocked_above)
        # (1, 2) is region 2 under region 2.
        self.assertFalse(walls[5].blocked_above)
        # Bottom row is all region 3.
        self.assertTrue(all(w.blocked_above for w in walls[6:]))
        self.assertFalse(walls[7].blocked_left)

    def test_outer_edge_is_walled(self):
        walls = walls_from_region_grid([[1, 1], [1, 1]])
        self.assertEqual(walls, [WallFlags(True, True), WallFlags(True, False),
                                 WallFlags(False, True), WallFlags(False, False)])

    def test_ragged_grid_rejected(self):
        with self.assertRaises(MalformedPuzzleError):
            walls_from_region_grid([[1, 1], [1]])


class TestTaskWalls(unittest.TestCase):

    def test_matches_region_grid(self):
        self.assertEqual(walls_from_task("1,1,2,1,2,2,3,3,3"), walls_from_region_grid(L_SHAPES))

    def test_not_square(self):
        with self.assertRaises(MalformedPuzzleError):
            walls_from_task("1,1,2,2,3")

    def test_non_integer(self):
        with self.assertRaises(MalformedPuzzleError):
            walls_from_task("1,a,2,2")


class TestMarkupWalls(unittest.TestCase):

    def test_matches_region_grid_inside(self):
        walls = walls_from_markup(markup_for(L_SHAPES))
        expected = walls_from_region_grid(L_SHAPES)
        self.assertEqual(len(walls), 9)
        # Markup carries no border classes on the outer edge; interior cells must agree.
        for idx in (4, 5, 7, 8):
            self.assertEqual(walls[idx], expected[idx])
        self.assertTrue(walls[2].blocked_left)
        self.assertTrue(walls[6].blocked_above)

    def test_no_cells(self):
        with self.assertRaises(MalformedPuzzleError):
            walls_from_markup("<html><body>nothing here</body></html>")

    def test_class_substrings_are_not_walls(self):
        markup = '<div tabindex="1" class="cell selectable btn blue cell-off"></div>'
        self.assertEqual(walls_from_markup(markup), [WallFlags(False, False)])

    def test_cell_without_off_class_does_not_swallow_next(self):
        markup = ('<div tabindex="1" class="cell selectable bt">x</div>\n'
                  '<div tabindex="1" class="cell selectable bl cell-off">y</div>')
        self.assertEqual(walls_from_markup(markup), [WallFlags(False, True)])


class TestSbnWalls(unittest.TestCase):

    def test_decodes_region_borders(self):
        grid = [[(r // 2) * 2 + c // 5 + 1 for c in range(10)] for r in range(10)]
        walls, stars = walls_from_sbn(sbn_for(grid, 2))
        self.assertEqual(stars, 2)
        self.assertEqual(walls, walls_from_region_grid(grid))

    def test_trailing_annotations_ignored(self):
        grid = [[r + 1] * 5 for r in range(5)]
        walls, _ = walls_from_sbn(sbn_for(grid, 1) + "e" + "0" * 9)
        self.assertEqual(walls, walls_from_region_grid(grid))

    def test_header(self):
        self.assertEqual(decode_sbn_header("AA2W"), (10, 2))

    def test_unknown_size_code(self):
        with self.assertRaises(MalformedPuzzleError):
            walls_from_sbn("ZZ1W0000")

    def test_truncated(self):
        with self.assertRaises(MalformedPuzzleError):
            walls_from_sbn("551W00")

    def test_invalid_character(self):
        with self.assertRaises(MalformedPuzzleError):
            walls_from_sbn("551W" + "!" * 7)

    def test_non_ascii_star_digit(self):
        # '²' passes str.isdigit() but int() rejects it.
        with self.assertRaises(MalformedPuzzleError):
            walls_from_sbn("55²W" + "0" * 7)


if __name__ == '__main__':
    unittest.main()
