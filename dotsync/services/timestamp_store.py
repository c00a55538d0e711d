"""
Timestamp store for dotsync.

Keeps the single "last checked" epoch value that gates how often the
orchestrator looks at the repositories. Write failures are logged and
returned, never raised.
"""

import time
from typing import Callable, Optional
import logging

from ..infra.state_store import TimestampBackend, WriteResult

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 4 * 60 * 60


class TimestampStore:
    """
    Interval gate over a TimestampBackend.

    Example:
        store = TimestampStore(FileTimestampBackend(path))
        if store.should_check():
            ...
            store.update()
    """

    def __init__(
        self,
        backend: TimestampBackend,
        interval: int = DEFAULT_INTERVAL,
        clock: Callable[[], float] = time.time
    ):
        self.backend = backend
        self.interval = int(interval)
        self.clock = clock

    def now(self) -> int:
        return int(self.clock())

    def last_check(self) -> Optional[int]:
        return self.backend.load()

    def should_check(self) -> bool:
        """True if nothing is stored or at least ``interval`` seconds have passed."""
        last = self.backend.load()
        if last is None:
            return True
        return self.now() - last >= self.interval

    def next_check_due(self) -> Optional[int]:
        """Epoch second at which the next check becomes due, or None if due now."""
        last = self.backend.load()
        if last is None:
            return None
        return last + self.interval

    def update(self, timestamp: Optional[int] = None) -> WriteResult:
        """
        Overwrite the stored value.

        Args:
            timestamp: Value to store (default: current time)
        """
        value = self.now() if timestamp is None else int(timestamp)
        result = self.backend.save(value)
        if not result.ok:
            logger.warning(f"Could not update sync state at {self.backend.describe()}: {result.error}")
        return result

    def touch(self, timestamp: Optional[int] = None) -> Optional[WriteResult]:
        """
        Record a completed check without moving the stored value backwards.

        A later value (an "ignore for the day" override) is left alone.
        Returns None when nothing was written.
        """
        value = self.now() if timestamp is None else int(timestamp)
        last = self.backend.load()
        if last is not None and last >= value:
            return None
        return self.update(value)
