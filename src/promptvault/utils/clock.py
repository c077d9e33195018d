"""Wall-clock helpers.

Timestamps are stored as integer epoch milliseconds everywhere in
promptvault. Components that need the current time accept a ``Clock``
so tests can substitute a fixed or advancing value.
"""

import time
from collections.abc import Callable

Clock = Callable[[], int]

MS_PER_MINUTE = 60_000


def now_ms() -> int:
    """Return the current time as epoch milliseconds."""
    return time.time_ns() // 1_000_000
