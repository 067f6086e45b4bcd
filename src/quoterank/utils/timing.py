"""Timing helpers for scoring runs"""
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from functools import wraps
from typing import Iterator, Optional

def _now() -> float:
    return time.perf_counter()

@dataclass
class Elapsed:
    """Filled in when the timed section exits."""
    seconds: float = 0.0

@contextmanager
def section_timer(name: str, logger: logging.Logger, level: int = logging.INFO) -> Iterator[Elapsed]:
    """Time a block; the yielded ``Elapsed`` holds the duration afterwards."""
    elapsed = Elapsed()
    t0 = _now()
    try:
        yield elapsed
    finally:
        elapsed.seconds = _now() - t0
        logger.log(level, "TIMER %s took %.3f s", name, elapsed.seconds)

def timeit(logger: logging.Logger, name: Optional[str] = None, level: int = logging.DEBUG):
    """Log the wall time of every call to the decorated function."""
    def deco(fn):
        label = name or fn.__qualname__
        @wraps(fn)
        def wrapper(*args, **kwargs):
            t0 = _now()
            try:
                return fn(*args, **kwargs)
            finally:
                logger.log(level, "TIMER %s took %.3f s", label, _now() - t0)
        return wrapper
    return deco
