"""Datetime utility functions."""

import time
from collections.abc import Callable

# Returns the current time as integer milliseconds since the Unix epoch
Clock = Callable[[], int]


def epoch_millis() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000
