from fibregs.config import ITERATIVE, MODES, RECURSIVE, RunConfig
from fibregs.driver import DriverError, load_driver, parse_driver
from fibregs.sequence import SequenceError, iterative_sequence, recursive_sequence, wrap

__all__ = [
    "ITERATIVE",
    "MODES",
    "RECURSIVE",
    "RunConfig",
    "DriverError",
    "load_driver",
    "parse_driver",
    "SequenceError",
    "iterative_sequence",
    "recursive_sequence",
    "wrap",
]
