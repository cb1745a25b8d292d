import logging
from typing import Iterator, List

from maze_quest.algo.base import Generator
from maze_quest.core.disjset import DisjointRoots, DisjointSet
from maze_quest.core.grid import Difficulty, MazeGraph, Wall

logger = logging.getLogger(__name__)


class RandomizedKruskal(Generator):
    """
    Knocks down random walls until the grid is connected enough.

    Every iteration draws a wall uniformly from the walls still standing.
    If the two cells it separates are in different sets, the sets are
    merged and the wall is removed; otherwise the wall stays and may be
    drawn again.

    HARD stops once every cell is in one set, which leaves a perfect maze
    (the removed walls form a spanning tree). NORMAL stops as soon as the
    entrance and exit share a set, which can leave unreachable pockets.
    """

    def __init__(self, width: int, height: int, difficulty: Difficulty = Difficulty.HARD,
                 seed: int = None, rng=None):
        super().__init__(width, height, seed=seed, rng=rng)
        self.difficulty = difficulty
        self.cells = DisjointSet(width * height)
        self.walls: List[Wall] = MazeGraph.candidate_walls(width, height)
        self.enter = 0
        self.exit = width * height - 1
        self.finished = False

    def is_complete(self) -> bool:
        if self.difficulty is Difficulty.HARD:
            return self.cells.distinct_sets() == 1
        return not isinstance(self.cells.find_roots(self.enter, self.exit), DisjointRoots)

    def run(self) -> Iterator[str]:
        rng = self.rng
        walls = self.walls

        while not self.is_complete():
            if not walls:
                # Only reachable on a grid with nothing to carve (1x1)
                break

            i = rng.randrange(len(walls))
            a, b = walls[i]
            roots = self.cells.find_roots(a, b)
            if isinstance(roots, DisjointRoots):
                self.cells.union(roots.root_a, roots.root_b)
                walls.pop(i)
                self.step_count += 1
                logger.debug("Removed wall (%d, %d), %d sets left", a, b,
                             self.cells.distinct_sets())

                if self.step_count % 100 == 0:
                    yield f"Carving... Sets: {self.cells.distinct_sets()}"

        self.finished = True
        yield "Done"

    @property
    def maze(self) -> MazeGraph:
        if not self.finished:
            raise RuntimeError("Generation has not finished; call run_all() first")
        return MazeGraph(self.width, self.height, self.walls, self.difficulty)
