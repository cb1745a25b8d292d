import unittest
import sys
import os
import shutil
from unittest import mock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_quest.core.grid import Difficulty, MazeGraph
from maze_quest.io.serializer import SnapshotSerializer
from maze_quest.main import cell_size_from_meta, main
from maze_quest.viz.renderer import Renderer

class TestRendererSession(unittest.TestCase):
    def setUp(self):
        os.makedirs("test_out", exist_ok=True)
        self.maze = MazeGraph.generate(6, 5, Difficulty.HARD, seed=4)

    def tearDown(self):
        shutil.rmtree("test_out", ignore_errors=True)

    def test_recorder_uses_given_path(self):
        renderer = Renderer(self.maze, record_path="test_out/play.mp4")
        self.assertTrue(renderer.recorder.active)
        self.assertEqual(renderer.recorder.output_file, "test_out/play.mp4")

    def test_no_recording_by_default(self):
        renderer = Renderer(self.maze)
        self.assertFalse(renderer.recorder.active)
        self.assertIsNone(renderer.recorder.output_file)

    def test_save_keeps_cell_size(self):
        path = "test_out/session.save"
        renderer = Renderer(self.maze, seed=4, cell_width=6, cell_height=3, save_path=path)
        renderer.navigator.right()
        renderer.save()

        maze, navigator, meta = SnapshotSerializer.load(path)
        self.assertEqual(maze, self.maze)
        self.assertEqual(navigator.history, renderer.navigator.history)
        self.assertEqual(cell_size_from_meta(meta), (6, 3))
        self.assertEqual(meta["seed"], 4)

    def test_play_restores_cell_size_and_records_once(self):
        path = "test_out/session.save"
        Renderer(self.maze, cell_width=6, cell_height=3, save_path=path).save()

        with mock.patch("maze_quest.viz.recorder.default_recording_path",
                        return_value="test_out/play.mp4") as rec_path, \
                mock.patch("maze_quest.viz.renderer.Renderer") as renderer_cls:
            main(["play", "--restore", path, "--record"])

        rec_path.assert_called_once()
        kwargs = renderer_cls.call_args.kwargs
        self.assertEqual((kwargs["cell_width"], kwargs["cell_height"]), (6, 3))
        self.assertEqual(kwargs["record_path"], "test_out/play.mp4")
        renderer_cls.return_value.run_loop.assert_called_once()

class TestCellSizeFromMeta(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(cell_size_from_meta({}), (4, 2))
        self.assertEqual(cell_size_from_meta({"seed": 3}), (4, 2))

    def test_rejects_bad_sizes(self):
        for meta in ({"cell_width": 1}, {"cell_height": "2"}, {"cell_width": None}):
            with self.assertRaises(ValueError):
                cell_size_from_meta(meta)

if __name__ == '__main__':
    unittest.main()
