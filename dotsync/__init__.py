"""
dotsync - Prompt-driven sync manager for dotfiles and agent config repos.

On every shell prompt dotsync decides whether it is time to look at the
tracked git working copies (dotfiles and the AI-assistant config repo),
and when one has drifted from its remote it asks what to do about it.

Quick Start:
    # In ~/.zshrc
    eval "$(dotsync hook zsh)"

    # From Python
    import dotsync

    ds = dotsync.DotSync()
    report = ds.check(force=True)
    for result in report.domains:
        print(result.domain, result.status.value, result.action)

Components:
    TimestampStore - Interval gate (4h by default)
    FailureLedger - Circuit breaker (3 failures per hour)
    RepositoryProber - Local/remote drift queries
    InteractiveResolver - Remediation menus
    SyncOrchestrator - One pass over all domains

Environment:
    SYNC_DISABLED, DOTFILES_SYNC_DISABLED, CLAUDE_SYNC_DISABLED - disable sync
    DOTFILES_PATH, CLAUDE_DIR, CLAUDE_REPO_URL - domain locations
"""

__version__ = "0.3.0"

# High-level API
from .api import DotSync, create

# Domain objects
from .domain import (
    SyncDomain,
    FailureRecord,
    DisabledMarker,
    RepositorySnapshot,
    PassReport,
    DomainResult,
    DomainStatus,
    ResolutionOutcome,
)

# Services (for advanced use)
from .services import (
    TimestampStore,
    FailureLedger,
    RepositoryProber,
    InteractiveResolver,
    SyncOrchestrator,
)

# Configuration
from .config import load_config

__all__ = [
    # Version
    "__version__",
    # High-level API
    "DotSync",
    "create",
    # Domain objects
    "SyncDomain",
    "FailureRecord",
    "DisabledMarker",
    "RepositorySnapshot",
    "PassReport",
    "DomainResult",
    "DomainStatus",
    "ResolutionOutcome",
    # Services
    "TimestampStore",
    "FailureLedger",
    "RepositoryProber",
    "InteractiveResolver",
    "SyncOrchestrator",
    # Configuration
    "load_config",
]
