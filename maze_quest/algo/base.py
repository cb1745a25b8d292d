import random
from abc import ABC, abstractmethod
from typing import Iterator, Optional


class Generator(ABC):
    def __init__(self, width: int, height: int, seed: int = None,
                 rng: Optional[random.Random] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Maze dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.seed = seed
        # An injected rng wins over the seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The finished maze is available from the generator once exhausted.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
