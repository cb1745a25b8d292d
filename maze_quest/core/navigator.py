from typing import Iterable, List, Optional, Tuple

from maze_quest.core.grid import Direction, MazeGraph, Position

HistoryEntry = Tuple[Position, Optional[Direction]]


class Navigator:
    """
    Cursor over a maze. Tracks the current cell and every step taken
    since the last reset; the first history entry is always the entrance
    with no direction.
    """

    __slots__ = ('maze', 'pos', '_history')

    def __init__(self, maze: MazeGraph):
        self.maze = maze
        self.pos = maze.enter_pos
        self._history: List[HistoryEntry] = [(self.pos, None)]

    @property
    def position(self) -> Position:
        return self.pos

    @property
    def history(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._history)

    def move(self, d: Direction) -> bool:
        """Attempt the given movement. Blocked or off-grid moves change nothing."""
        dest = self.maze.move_pos(self.pos, d)
        if dest is None:
            return False
        self.pos = dest
        self._history.append((dest, d))
        return True

    def moves(self, directions: Iterable[Direction]) -> List[Direction]:
        """Apply moves until one fails. Returns the completed moves."""
        completed = []
        for d in directions:
            if not self.move(d):
                break
            completed.append(d)
        return completed

    def left(self) -> 'Navigator':
        self.move(Direction.LEFT)
        return self

    def right(self) -> 'Navigator':
        self.move(Direction.RIGHT)
        return self

    def up(self) -> 'Navigator':
        self.move(Direction.UP)
        return self

    def down(self) -> 'Navigator':
        self.move(Direction.DOWN)
        return self

    def is_exit(self) -> bool:
        return self.maze.pos_to_cell(self.pos) == self.maze.exit

    def reset(self) -> 'Navigator':
        self.pos = self.maze.enter_pos
        del self._history[1:]
        return self

    def restore(self, position: Position, history: Iterable[HistoryEntry]):
        """
        Put the cursor back where a saved session left it. The history must
        start at the entrance and end at `position`.
        """
        history = [(Position(*p), d) for p, d in history]
        if not history or history[0] != (self.maze.enter_pos, None):
            raise ValueError("History must start at the entrance")
        if history[-1][0] != position:
            raise ValueError("History does not end at the saved position")
        self.pos = Position(*position)
        self._history = history

    def __repr__(self):
        return f"Navigator(pos={tuple(self.pos)}, steps={len(self._history) - 1})"
