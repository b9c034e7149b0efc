"""
Fibonacci sequence generators over fixed-width unsigned registers.

Two interchangeable strategies produce the same numbers:

  - iterative_sequence: the "register" style. Two registers hold the last
    two values; each step sums them, emits the low register and shifts.
  - recursive_sequence: the "software" style. Each step sums the pair, emits
    the sum and stops once the sum exceeds a threshold.

Arithmetic wraps like an unsigned register of `width` bits (8 by default).
Pass width=None for unbounded Python integers.
"""

import logging

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 10
DEFAULT_SEED = (0, 1)
DEFAULT_LIMIT = 100
DEFAULT_WIDTH = 8


class SequenceError(RuntimeError):
    pass


def register_mask(width):
    """Return the bit mask for a `width`-bit register, or None if unbounded."""
    if width is None:
        return None
    if isinstance(width, bool) or not isinstance(width, int) or width < 1:
        raise SequenceError(f"Register width must be a positive integer, got {width!r}")
    return (1 << width) - 1


def wrap(value, width=DEFAULT_WIDTH):
    """Truncate `value` to a `width`-bit unsigned register."""
    mask = register_mask(width)
    if mask is None:
        return value
    return value & mask


def check_count(count):
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise SequenceError(f"Count must be a non-negative integer, got {count!r}")
    return count


def iterative_sequence(count=DEFAULT_COUNT, width=DEFAULT_WIDTH):
    """Yield exactly `count` Fibonacci values, starting 0, 1, 1, 2, ..."""
    check_count(count)
    mask = register_mask(width)

    prev, curr = 0, 1
    for _ in range(count):
        nxt = prev + curr
        if mask is not None:
            nxt &= mask
        # The low register goes out before the shift, so the first value is 0.
        yield prev
        prev, curr = curr, nxt


def check_seed(seed, width=DEFAULT_WIDTH):
    mask = register_mask(width)
    if len(seed) != 2:
        raise SequenceError(f"Seed must be a pair of integers, got {seed!r}")
    for value in seed:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SequenceError(f"Seed values must be integers, got {value!r}")
        if value < 0 or (mask is not None and value > mask):
            top = "unbounded" if mask is None else mask
            raise SequenceError(f"Seed value {value} outside register range 0..{top}")
    return tuple(seed)


def recursive_sequence(seed=DEFAULT_SEED, limit=DEFAULT_LIMIT, width=DEFAULT_WIDTH):
    """
    Yield pair sums starting from `seed` until a sum exceeds `limit`.

    The value that crosses the limit is yielded before stopping. With a
    bounded width a sum can wrap back to <= limit, in which case generation
    carries on with the wrapped values.

    Raises SequenceError when the seed can never cross the limit. A limit at
    or above the register's top value is rejected before the first step.
    Otherwise the pair map is a bijection on a finite register space, so a
    wrapped run that comes back to its seed pair without crossing the limit
    loops forever.
    """
    a, b = check_seed(seed, width)
    mask = register_mask(width)
    if mask is not None and limit >= mask:
        raise SequenceError(f"A {width}-bit register never exceeds {limit}")
    if mask is None and a == 0 and b == 0 and limit >= 0:
        raise SequenceError(f"Seed {seed!r} never exceeds {limit}")

    steps = 0
    while True:
        r = a + b
        if mask is not None:
            r &= mask
        steps += 1
        yield r
        if r > limit:
            logger.debug("Crossed limit %d after %d steps", limit, steps)
            return
        a, b = b, r
        if (a, b) == (seed[0], seed[1]):
            raise SequenceError(
                f"Seed {tuple(seed)!r} cycles after {steps} steps without exceeding {limit}"
            )
