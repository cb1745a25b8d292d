from typing import FrozenSet, NamedTuple, Tuple, Union

from maze_quest.core.grid import Direction, MazeGraph, Position
from maze_quest.core.navigator import Navigator


class CellBox(NamedTuple):
    top: int
    left: int
    bottom: int
    right: int


class Locator:
    """
    Maps grid positions onto a board where every cell is a
    cell_width x cell_height box. Neighbouring boxes share their border
    line, so the board is W*cell_width x H*cell_height.

      0     4
      *-----*
      |  +  |   + = locate()
      *-----*
      2
    """

    def __init__(self, maze: MazeGraph, cell_width: int = 4, cell_height: int = 2):
        if cell_width < 2 or cell_height < 2:
            raise ValueError(f"Cell size must be at least 2x2, got {cell_width}x{cell_height}")
        self.maze = maze
        self.cell_width = cell_width
        self.cell_height = cell_height

    def cell_box(self, p: Position) -> CellBox:
        top = p.y * self.cell_height
        left = p.x * self.cell_width
        return CellBox(top, left, top + self.cell_height, left + self.cell_width)

    def locate(self, target: Union[Position, Navigator]) -> Position:
        """Board coordinate at the centre of a cell (or of a navigator's cell)."""
        p = target.pos if isinstance(target, Navigator) else target
        box = self.cell_box(p)
        return Position(box.left + self.cell_width // 2, box.top + self.cell_height // 2)

    def dimensions(self) -> Tuple[int, int]:
        return (self.maze.width * self.cell_width, self.maze.height * self.cell_height)

    def exit(self) -> Position:
        return self.locate(self.maze.exit_pos)

    def movements(self, p: Position) -> FrozenSet[Direction]:
        return self.maze.movements(p)
