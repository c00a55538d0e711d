"""
Failure ledger records for dotsync.

The ledger is a flat, append-only text log. Each failure is written as
``epoch:domain:message``; once the breaker trips a ``DISABLED:epoch:reason``
line is appended and stays there until the log is cleared.
"""

from dataclasses import dataclass
from typing import Optional, Union, Dict, Any

DISABLED_TOKEN = "DISABLED"


@dataclass(frozen=True)
class FailureRecord:
    """A single recorded failure."""
    timestamp: int
    domain: str
    message: str

    def to_line(self) -> str:
        return f"{self.timestamp}:{self.domain}:{self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'domain': self.domain,
            'message': self.message,
        }


@dataclass(frozen=True)
class DisabledMarker:
    """Terminal record written when the circuit breaker trips."""
    timestamp: int
    reason: str

    def to_line(self) -> str:
        return f"{DISABLED_TOKEN}:{self.timestamp}:{self.reason}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'reason': self.reason,
        }


def parse_ledger_line(line: str) -> Optional[Union[FailureRecord, DisabledMarker]]:
    """
    Parse one ledger line.

    Returns None for blank or malformed lines. A ``DISABLED:`` line is a
    marker even if its timestamp is unreadable.
    """
    line = line.rstrip('\n')
    if not line.strip():
        return None

    if line.startswith(f"{DISABLED_TOKEN}:"):
        _, _, rest = line.partition(':')
        ts, _, reason = rest.partition(':')
        try:
            timestamp = int(ts)
        except ValueError:
            timestamp = 0
        return DisabledMarker(timestamp=timestamp, reason=reason)

    parts = line.split(':', 2)
    if len(parts) < 2:
        return None
    try:
        timestamp = int(parts[0])
    except ValueError:
        return None

    return FailureRecord(
        timestamp=timestamp,
        domain=parts[1],
        message=parts[2] if len(parts) > 2 else "",
    )
