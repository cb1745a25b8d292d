import random
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_quest.algo.kruskal import RandomizedKruskal
from maze_quest.algo.solvers import BFS, reachable_cells
from maze_quest.core.disjset import DisjointSet, Same
from maze_quest.core.grid import Difficulty, MazeGraph

class TestGenerators(unittest.TestCase):
    def test_hard_is_spanning_tree(self):
        for seed in range(10):
            w, h = 12, 9
            maze = MazeGraph.generate(w, h, Difficulty.HARD, seed=seed)
            total = len(MazeGraph.candidate_walls(w, h))

            self.assertEqual(len(maze.walls), total - (w * h - 1))
            self.assertEqual(reachable_cells(maze), w * h, "Hard maze should connect every cell")

    def test_normal_connects_enter_and_exit(self):
        for seed in range(10):
            maze = MazeGraph.generate(15, 15, Difficulty.NORMAL, seed=seed)
            path = BFS(maze).solve()
            self.assertTrue(path, "Normal maze must have a path to the exit")
            self.assertEqual(path[0], maze.enter_pos)
            self.assertEqual(path[-1], maze.exit_pos)

    def test_normal_stops_early(self):
        gen = RandomizedKruskal(15, 15, Difficulty.NORMAL, seed=5)
        gen.run_all()
        roots = gen.cells.find_roots(gen.enter, gen.exit)
        self.assertIsInstance(roots, Same)
        # Never removes more walls than a spanning tree needs
        total = len(MazeGraph.candidate_walls(15, 15))
        self.assertGreaterEqual(len(gen.maze.walls), total - (15 * 15 - 1))

    def test_normal_stops_on_joining_union(self):
        class RecordingSet(DisjointSet):
            def __init__(self, size, enter, exit):
                super().__init__(size)
                self.enter, self.exit = enter, exit
                self.joined_before = []

            def union(self, root_a, root_b):
                self.joined_before.append(self.lookup(self.enter) == self.lookup(self.exit))
                super().union(root_a, root_b)

        for seed in range(5):
            gen = RandomizedKruskal(12, 12, Difficulty.NORMAL, seed=seed)
            gen.cells = RecordingSet(12 * 12, gen.enter, gen.exit)
            gen.run_all()

            joined = gen.cells.joined_before
            self.assertTrue(joined)
            # Every union happened while enter and exit were still apart
            self.assertNotIn(True, joined)
            self.assertEqual(gen.cells.lookup(gen.enter), gen.cells.lookup(gen.exit))

    def test_normal_leaves_pockets(self):
        w, h = 15, 15
        hard_walls = len(MazeGraph.candidate_walls(w, h)) - (w * h - 1)
        pockets = 0
        for seed in range(10):
            maze = MazeGraph.generate(w, h, Difficulty.NORMAL, seed=seed)
            if reachable_cells(maze) < w * h:
                pockets += 1
                self.assertGreater(len(maze.walls), hard_walls)
        self.assertGreater(pockets, 0)

    def test_remaining_walls_are_candidates_in_order(self):
        maze = MazeGraph.generate(6, 6, Difficulty.HARD, seed=11)
        candidates = MazeGraph.candidate_walls(6, 6)
        positions = [candidates.index(w) for w in maze.walls]
        self.assertEqual(positions, sorted(positions))

    def test_determinism(self):
        w, h = 10, 10
        maze1 = MazeGraph.generate(w, h, Difficulty.HARD, seed=12345)

        gen = RandomizedKruskal(w, h, Difficulty.HARD, seed=12345)
        for _ in gen.run(): pass

        self.assertEqual(maze1.walls, gen.maze.walls)

    def test_injected_rng(self):
        maze1 = MazeGraph.generate(8, 8, Difficulty.NORMAL, rng=random.Random(99))
        maze2 = MazeGraph.generate(8, 8, Difficulty.NORMAL, rng=random.Random(99))
        self.assertEqual(maze1.walls, maze2.walls)
        self.assertIs(maze1.difficulty, Difficulty.NORMAL)

    def test_single_cell(self):
        for difficulty in Difficulty:
            maze = MazeGraph.generate(1, 1, difficulty)
            self.assertEqual(maze.walls, ())
            self.assertEqual(maze.enter, maze.exit)
            self.assertTrue(maze.navigator().is_exit())

    def test_single_row_and_column(self):
        for difficulty in Difficulty:
            self.assertEqual(MazeGraph.generate(1, 6, difficulty, seed=1).walls, ())
            self.assertEqual(MazeGraph.generate(6, 1, difficulty, seed=1).walls, ())

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            MazeGraph.generate(0, 5)
        with self.assertRaises(ValueError):
            MazeGraph.generate(5, -1)

    def test_maze_before_run(self):
        gen = RandomizedKruskal(4, 4)
        with self.assertRaises(RuntimeError):
            gen.maze

    def test_progress_messages(self):
        gen = RandomizedKruskal(20, 20, Difficulty.HARD, seed=1)
        messages = list(gen.run())
        self.assertEqual(messages[-1], "Done")
        self.assertEqual(gen.step_count, 20 * 20 - 1)

if __name__ == '__main__':
    unittest.main()
