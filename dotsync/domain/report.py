"""
Pass report domain objects for dotsync.

Provides result types describing what one orchestration pass did, so
`dotsync check --json` and the tests can inspect it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional

from .resolution import ResolutionOutcome


class DomainStatus(Enum):
    """Status of one domain within a pass."""
    CHECKED = "checked"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class DomainResult:
    """What happened to one domain during a pass."""
    domain: str
    status: DomainStatus
    action: str  # e.g., "in_sync", "local_changes", "remote_updates", "not_configured"
    message: Optional[str] = None
    outcome: Optional[ResolutionOutcome] = None
    cloned: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status == DomainStatus.CHECKED

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'domain': self.domain,
            'status': self.status.value,
            'action': self.action,
        }
        if self.message:
            result['message'] = self.message
        if self.outcome:
            result['outcome'] = self.outcome.value
        if self.cloned:
            result['cloned'] = True
        return result


@dataclass
class PassReport:
    """
    Summary of one orchestration pass.

    ``ran`` is False when a fast-exit gate stopped the pass before any
    domain was looked at; ``skip_reason`` then says which gate.
    """
    ran: bool = False
    skip_reason: Optional[str] = None
    timestamp_updated: bool = False
    domains: List[DomainResult] = field(default_factory=list)

    @property
    def any_success(self) -> bool:
        return any(d.succeeded for d in self.domains)

    @property
    def failed(self) -> int:
        return sum(1 for d in self.domains if d.status == DomainStatus.FAILED)

    def add(self, result: DomainResult) -> None:
        self.domains.append(result)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'pass',
            'ran': self.ran,
            'skip_reason': self.skip_reason,
            'any_success': self.any_success,
            'timestamp_updated': self.timestamp_updated,
            'domains': [d.to_dict() for d in self.domains],
        }
