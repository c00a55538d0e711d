"""
Service layer for dotsync.

- TimestampStore: interval gate
- FailureLedger: circuit breaker
- RepositoryProber: read-only git queries
- InteractiveResolver: remediation menus
- ChangeDetectorRunner: per-domain external hook
- SyncOrchestrator: one pass over all domains
"""

from .timestamp_store import TimestampStore
from .failure_ledger import FailureLedger
from .prober import RepositoryProber
from .resolver import InteractiveResolver
from .change_detector import ChangeDetectorRunner, DetectorResult
from .orchestrator import SyncOrchestrator

__all__ = [
    'TimestampStore',
    'FailureLedger',
    'RepositoryProber',
    'InteractiveResolver',
    'ChangeDetectorRunner',
    'DetectorResult',
    'SyncOrchestrator',
]
