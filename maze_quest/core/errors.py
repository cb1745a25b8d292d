from typing import Tuple


class MazeError(Exception):
    """Base class for recoverable maze errors."""


class WallOutOfBounds(MazeError):
    def __init__(self, wall: Tuple[int, int]):
        self.wall = tuple(wall)
        super().__init__(f"wall index out of bound: {self.wall}")


class DifficultyParseError(MazeError, ValueError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"unknown difficulty '{text}' (expected 'normal' or 'hard')")
