import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_quest.core.geometry import CellBox, Locator
from maze_quest.core.grid import Difficulty, Direction, MazeGraph, Position
from maze_quest.viz.board import draw_board, render_text

WALLS = [(0, 5), (1, 2), (2, 7), (3, 8), (5, 10), (8, 13), (10, 11), (11, 12), (11, 16),
         (13, 14), (14, 19), (15, 20), (16, 17), (16, 21), (17, 18), (17, 22), (19, 24), (20, 21)]

class TestLocator(unittest.TestCase):
    def setUp(self):
        self.maze = MazeGraph.create(5, 5, WALLS)
        self.locator = self.maze.locator()

    def test_cell_box(self):
        self.assertEqual(self.locator.cell_box(Position(0, 0)), CellBox(0, 0, 2, 4))
        self.assertEqual(self.locator.cell_box(Position(1, 2)), CellBox(top=4, left=4, bottom=6, right=8))

    def test_locate(self):
        self.assertEqual(self.locator.locate(Position(1, 2)), Position(6, 5))
        j = self.maze.navigator()
        self.assertEqual(self.locator.locate(j), Position(2, 1))
        j.right()
        self.assertEqual(self.locator.locate(j), Position(6, 1))

    def test_dimensions_and_exit(self):
        self.assertEqual(self.locator.dimensions(), (20, 10))
        self.assertEqual(self.locator.exit(), Position(18, 9))

    def test_custom_cell_size(self):
        loc = Locator(self.maze, cell_width=6, cell_height=3)
        self.assertEqual(loc.dimensions(), (30, 15))
        self.assertEqual(loc.cell_box(Position(4, 4)), CellBox(12, 24, 15, 30))
        self.assertEqual(loc.locate(Position(0, 0)), Position(3, 1))

    def test_rejects_tiny_cells(self):
        with self.assertRaises(ValueError):
            Locator(self.maze, cell_width=1, cell_height=2)

    def test_movements(self):
        self.assertEqual(self.locator.movements(Position(0, 1)), {Direction.RIGHT})

class TestBoard(unittest.TestCase):
    def setUp(self):
        self.maze = MazeGraph.create(5, 5, WALLS)
        self.board = draw_board(self.maze)

    def test_shape(self):
        self.assertEqual(len(self.board), 11)
        for row in self.board:
            self.assertEqual(len(row), 21)

    def test_outer_frame(self):
        b = self.board
        self.assertEqual((b[0][0], b[0][20], b[10][0], b[10][20]), ('┌', '┐', '└', '┘'))
        for j in range(21):
            self.assertNotEqual(b[0][j], ' ')
            self.assertNotEqual(b[10][j], ' ')
        for i in range(11):
            self.assertNotEqual(b[i][0], ' ')
            self.assertNotEqual(b[i][20], ' ')

    def test_open_and_closed_boundaries(self):
        b = self.board
        # (0,0) -> (1,0) is open
        self.assertEqual(b[1][4], ' ')
        # (0,0) / (0,1) is walled
        self.assertEqual(b[2][1:4], ['─', '─', '─'])
        # (1,2) / (2,2) is walled: wall (11, 12)
        self.assertEqual(b[5][8], '│')

    def test_junctions(self):
        b = self.board
        # Only the wall to the left of this junction remains
        self.assertEqual(b[2][4], "╴")
        # Top edge above an open vertical boundary
        self.assertEqual(b[0][4], "─")

    def test_board_matches_movements(self):
        maze = MazeGraph.generate(9, 7, Difficulty.HARD, seed=2)
        loc = maze.locator()
        b = draw_board(maze, loc)
        for c in range(maze.size):
            p = maze.cell_to_pos(c)
            box = loc.cell_box(p)
            moves = maze.movements(p)
            mid_row = box.top + 1
            mid_col = box.left + 1
            self.assertEqual(b[mid_row][box.right] == ' ', Direction.RIGHT in moves)
            self.assertEqual(b[mid_row][box.left] == ' ', Direction.LEFT in moves)
            self.assertEqual(b[box.top][mid_col] == ' ', Direction.UP in moves)
            self.assertEqual(b[box.bottom][mid_col] == ' ', Direction.DOWN in moves)
        self.assertNotIn('*', render_text(maze, loc))

    def test_render_text(self):
        text = render_text(self.maze)
        lines = text.split("\n")
        self.assertEqual(len(lines), 11)
        self.assertTrue(lines[0].startswith('┌'))

if __name__ == '__main__':
    unittest.main()
