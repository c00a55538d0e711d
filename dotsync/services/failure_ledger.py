"""
Failure ledger (circuit breaker) for dotsync.

Every operational failure is appended to a flat log. When the number of
failures in the trailing window reaches the threshold, a DISABLED record
is appended and all sync activity stops until someone clears the log.
The breaker never resets itself.
"""

import time
from typing import Callable, List, Optional
import logging

from rich.console import Console

from ..domain.ledger import DisabledMarker, FailureRecord, parse_ledger_line
from ..infra.state_store import LedgerBackend

logger = logging.getLogger(__name__)

DEFAULT_MAX_FAILURES = 3
DEFAULT_WINDOW = 60 * 60

SCOPE_GLOBAL = "global"
SCOPE_DOMAIN = "domain"


class FailureLedger:
    """
    Circuit breaker over an append-only LedgerBackend.

    The failure count is taken across all domains by default
    (``scope="global"``); ``scope="domain"`` counts only the failing
    domain. A DISABLED record always stops every domain.
    """

    def __init__(
        self,
        backend: LedgerBackend,
        max_failures: int = DEFAULT_MAX_FAILURES,
        window: int = DEFAULT_WINDOW,
        scope: str = SCOPE_GLOBAL,
        clock: Callable[[], float] = time.time,
        console: Optional[Console] = None
    ):
        if scope not in (SCOPE_GLOBAL, SCOPE_DOMAIN):
            raise ValueError(f"Unknown circuit breaker scope: {scope}")
        self.backend = backend
        self.max_failures = int(max_failures)
        self.window = int(window)
        self.scope = scope
        self.clock = clock
        self.console = console or Console()

    def _entries(self):
        for line in self.backend.read_lines():
            entry = parse_ledger_line(line)
            if entry is not None:
                yield entry

    def records(self) -> List[FailureRecord]:
        """All failure records, oldest first."""
        return [e for e in self._entries() if isinstance(e, FailureRecord)]

    def disabled_marker(self) -> Optional[DisabledMarker]:
        for entry in self._entries():
            if isinstance(entry, DisabledMarker):
                return entry
        return None

    def is_enabled(self) -> bool:
        return self.disabled_marker() is None

    def recent_failure_count(self, domain: Optional[str] = None, now: Optional[int] = None) -> int:
        """Failures at or after ``now - window``, optionally for one domain."""
        now = int(self.clock()) if now is None else now
        cutoff = now - self.window
        return sum(
            1 for record in self.records()
            if record.timestamp >= cutoff and (domain is None or record.domain == domain)
        )

    def record_failure(self, domain: str, message: str) -> bool:
        """
        Append a failure and trip the breaker if the window is full.

        Args:
            domain: Ledger tag of the failing domain
            message: One-line description

        Returns:
            True if this failure tripped the breaker
        """
        now = int(self.clock())
        # Colons would break the record format
        record = FailureRecord(timestamp=now, domain=domain.replace(':', '-'), message=message.replace('\n', ' '))
        result = self.backend.append(record.to_line())
        if not result.ok:
            logger.debug(f"Could not append to failure ledger {self.backend.describe()}: {result.error}")
            return False

        logger.info(f"Recorded sync failure for {domain}: {message}")

        if not self.is_enabled():
            return False

        count = self.recent_failure_count(
            domain=record.domain if self.scope == SCOPE_DOMAIN else None,
            now=now,
        )
        if count < self.max_failures:
            return False

        marker = DisabledMarker(timestamp=now, reason=f"Too many failures ({count})")
        result = self.backend.append(marker.to_line())
        if not result.ok:
            logger.debug(f"Could not append disable marker to {self.backend.describe()}: {result.error}")

        self.console.print(f"[bold yellow]⚠️  Sync Manager: Auto-disabled after {count} failures[/bold yellow]")
        self.console.print(
            f"   Run 'dotsync clear-failures' or 'rm {self.backend.describe()}' to re-enable"
        )
        return True

    def clear(self) -> bool:
        """Delete the ledger, re-enabling sync. Returns True if anything was removed."""
        cleared = self.backend.clear()
        if cleared:
            logger.info(f"Cleared failure ledger {self.backend.describe()}")
        return cleared
