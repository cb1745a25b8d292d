import random
from enum import Enum
from typing import FrozenSet, Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from maze_quest.core.errors import DifficultyParseError, WallOutOfBounds

Wall = Tuple[int, int]


class Direction(Enum):
    LEFT = 'left'
    RIGHT = 'right'
    UP = 'up'
    DOWN = 'down'

    @property
    def dx(self) -> int:
        return DX[self]

    @property
    def dy(self) -> int:
        return DY[self]

    @property
    def opposite(self) -> 'Direction':
        return OPPOSITE[self]


# Direction Helpers
DIRECTIONS = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)
DX = {Direction.LEFT: -1, Direction.RIGHT: 1, Direction.UP: 0, Direction.DOWN: 0}
DY = {Direction.LEFT: 0, Direction.RIGHT: 0, Direction.UP: -1, Direction.DOWN: 1}
OPPOSITE = {
    Direction.LEFT: Direction.RIGHT, Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN, Direction.DOWN: Direction.UP,
}


class Difficulty(Enum):
    NORMAL = 'normal'
    HARD = 'hard'

    @classmethod
    def parse(cls, text: str) -> 'Difficulty':
        try:
            return cls(text.strip().lower())
        except (ValueError, AttributeError):
            raise DifficultyParseError(text) from None

    def __str__(self):
        return self.value


class Position(NamedTuple):
    """Grid coordinates (column, row), not screen coordinates."""
    x: int
    y: int

    def mv(self, d: Direction, amount: int = 1) -> 'Position':
        return Position(self.x + DX[d] * amount, self.y + DY[d] * amount)


class MazeGraph:
    """
    A W x H grid of cells plus the walls still standing between adjacent
    cells. Cells are numbered row-major (index = y * width + x); a wall is
    a pair of adjacent cell indices. Anything not listed as a wall is a
    passage.

    Instances are not modified after construction. Build one with
    `generate` (random, always solvable) or `create` (explicit walls).
    """

    __slots__ = ('width', 'height', 'walls', 'enter', 'exit', 'difficulty', '_blocked')

    def __init__(self, width: int, height: int, walls: Iterable[Wall],
                 difficulty: Difficulty = Difficulty.HARD):
        self.width = width
        self.height = height
        self.walls: Tuple[Wall, ...] = tuple((int(a), int(b)) for a, b in walls)
        self.enter = 0
        self.exit = width * height - 1
        self.difficulty = difficulty
        # Orientation-free lookup set
        self._blocked: FrozenSet[Wall] = frozenset(
            (a, b) if a < b else (b, a) for a, b in self.walls
        )

    @staticmethod
    def candidate_walls(width: int, height: int) -> List[Wall]:
        """
        Every internal wall of a full grid, scanning cells row-major:
        the wall to the right (unless at row end), then the wall below
        (unless on the last row).
        """
        size = width * height
        walls: List[Wall] = []
        for c in range(size):
            if c % width != width - 1:
                walls.append((c, c + 1))
            below = c + width
            if below < size:
                walls.append((c, below))
        return walls

    @classmethod
    def create(cls, width: int, height: int, walls: Sequence[Wall],
               difficulty: Difficulty = Difficulty.HARD) -> 'MazeGraph':
        """
        Builds a maze from an explicit wall list. No connectivity check is
        made, so the result may be unsolvable.
        """
        exit_idx = width * height - 1
        for wall in walls:
            a, b = wall
            if not (0 <= a <= exit_idx and 0 <= b <= exit_idx):
                raise WallOutOfBounds(wall)
        return cls(width, height, walls, difficulty)

    @classmethod
    def generate(cls, width: int, height: int, difficulty: Difficulty = Difficulty.HARD,
                 seed: Optional[int] = None, rng: Optional[random.Random] = None) -> 'MazeGraph':
        from maze_quest.algo.kruskal import RandomizedKruskal

        gen = RandomizedKruskal(width, height, difficulty, seed=seed, rng=rng)
        gen.run_all()
        return gen.maze

    # Index helpers

    def pos_to_cell(self, p: Position) -> int:
        return p.y * self.width + p.x

    def cell_to_pos(self, c: int) -> Position:
        return Position(c % self.width, c // self.width)

    def in_bounds(self, p: Position) -> bool:
        return 0 <= p.x < self.width and 0 <= p.y < self.height

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def enter_pos(self) -> Position:
        return self.cell_to_pos(self.enter)

    @property
    def exit_pos(self) -> Position:
        return self.cell_to_pos(self.exit)

    # Movement queries

    def has_wall(self, a: int, b: int) -> bool:
        return ((a, b) if a < b else (b, a)) in self._blocked

    def move_pos(self, p: Position, d: Direction) -> Optional[Position]:
        """
        Position reached by stepping from p in direction d, or None when
        the step leaves the grid or crosses a wall.
        """
        if not self.in_bounds(p):
            return None

        if d is Direction.LEFT and p.x == 0:
            return None
        if d is Direction.RIGHT and p.x == self.width - 1:
            return None
        if d is Direction.UP and p.y == 0:
            return None
        if d is Direction.DOWN and p.y == self.height - 1:
            return None

        dest = p.mv(d)
        if self.has_wall(self.pos_to_cell(p), self.pos_to_cell(dest)):
            return None
        return dest

    def movements(self, p: Position) -> FrozenSet[Direction]:
        """Directions that can be taken from p."""
        return frozenset(d for d in DIRECTIONS if self.move_pos(p, d) is not None)

    def get_open_neighbors(self, c: int) -> Iterator[int]:
        """Yields indices of cells reachable from cell c in one step."""
        p = self.cell_to_pos(c)
        for d in DIRECTIONS:
            dest = self.move_pos(p, d)
            if dest is not None:
                yield self.pos_to_cell(dest)

    def navigator(self):
        from maze_quest.core.navigator import Navigator
        return Navigator(self)

    def locator(self, cell_width: int = 4, cell_height: int = 2):
        from maze_quest.core.geometry import Locator
        return Locator(self, cell_width, cell_height)

    def __eq__(self, other):
        if not isinstance(other, MazeGraph):
            return NotImplemented
        return (self.width, self.height, self.walls, self.difficulty) == \
            (other.width, other.height, other.walls, other.difficulty)

    def __hash__(self):
        return hash((self.width, self.height, self.walls, self.difficulty))

    def __repr__(self):
        return (f"MazeGraph({self.width}x{self.height}, {self.difficulty}, "
                f"walls={len(self.walls)})")
