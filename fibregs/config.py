import dataclasses
from dataclasses import dataclass
from typing import Optional, Tuple

from fibregs.sequence import (
    DEFAULT_COUNT,
    DEFAULT_LIMIT,
    DEFAULT_SEED,
    DEFAULT_WIDTH,
    SequenceError,
    iterative_sequence,
    recursive_sequence,
)

ITERATIVE = "iterative"
RECURSIVE = "recursive"
MODES = (ITERATIVE, RECURSIVE)


@dataclass(frozen=True)
class RunConfig:
    """One generator run: which strategy and the values it starts from."""

    mode: str = ITERATIVE
    count: int = DEFAULT_COUNT
    seed: Tuple[int, int] = DEFAULT_SEED
    limit: int = DEFAULT_LIMIT
    width: Optional[int] = DEFAULT_WIDTH

    def __post_init__(self):
        if self.mode not in MODES:
            raise SequenceError(f"Unknown mode {self.mode!r}, expected one of {MODES}")

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)

    def values(self):
        """Run the selected generator and yield its values."""
        if self.mode == ITERATIVE:
            return iterative_sequence(self.count, width=self.width)
        return recursive_sequence(self.seed, limit=self.limit, width=self.width)

    def lines(self):
        """Yield the printed form of each value."""
        if self.mode == ITERATIVE:
            for i, value in enumerate(self.values()):
                yield f"Fibonacci_{i}: {value}"
        else:
            for value in self.values():
                yield f"Fibonacci_num: {value}"
