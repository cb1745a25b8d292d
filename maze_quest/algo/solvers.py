from abc import ABC, abstractmethod
from array import array
from collections import deque
from typing import Iterator, List, Optional

from maze_quest.core.grid import MazeGraph, Position


class Solver(ABC):
    def __init__(self, maze: MazeGraph):
        self.maze = maze
        self.path: List[Position] = []
        self.visited_count = 0

    @abstractmethod
    def run(self, start: Position, end: Position) -> Iterator[str]:
        pass

    def solve(self, start: Position = None, end: Position = None) -> List[Position]:
        """Runs to completion and returns the path (empty if there is none)."""
        start = self.maze.enter_pos if start is None else start
        end = self.maze.exit_pos if end is None else end
        for _ in self.run(start, end):
            pass
        return self.path


class BFS(Solver):
    """Breadth-first search over passable adjacencies; yields a shortest path."""

    def run(self, start: Position, end: Optional[Position]) -> Iterator[str]:
        """With no end the whole component around start is explored."""
        maze = self.maze
        self.path = []
        start_idx = maze.pos_to_cell(start)
        end_idx = maze.pos_to_cell(end) if end is not None else -1

        # Dense parent array, -1 = unvisited
        self.parents = array('i', [-1] * maze.size)
        self.parents[start_idx] = start_idx
        self.visited_count = 1

        queue = deque([start_idx])
        while queue:
            current = queue.popleft()
            if current == end_idx:
                break

            for nxt in maze.get_open_neighbors(current):
                if self.parents[nxt] == -1:
                    self.parents[nxt] = current
                    self.visited_count += 1
                    queue.append(nxt)

            if self.visited_count % 100 == 0:
                yield f"Visited: {self.visited_count}"

        if end_idx != -1:
            self.reconstruct_path(start_idx, end_idx)
        yield "Solved"

    def reconstruct_path(self, start_idx: int, end_idx: int):
        if self.parents[end_idx] == -1:
            return

        curr = end_idx
        while curr != start_idx:
            self.path.append(self.maze.cell_to_pos(curr))
            curr = self.parents[curr]
        self.path.append(self.maze.cell_to_pos(start_idx))
        self.path.reverse()


def reachable_cells(maze: MazeGraph, start: Position = None) -> int:
    """Number of cells reachable from start (the entrance by default)."""
    bfs = BFS(maze)
    start = maze.enter_pos if start is None else start
    for _ in bfs.run(start, None):
        pass
    return bfs.visited_count
