"""Wall-clock helpers. All timestamps are integer seconds since the epoch."""

import time


def utc_timestamp() -> int:
    """Current time, truncated to whole seconds."""
    return int(time.time())
