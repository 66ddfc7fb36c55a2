"""Time sources used by timed blocks and event timestamps."""

import time


class SystemClock:
    """Wall-clock time in seconds since the epoch."""

    def now(self) -> float:
        return time.time()
