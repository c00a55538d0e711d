"""
Domain objects for dotsync.

- SyncDomain: descriptor of one tracked repository
- FailureRecord / DisabledMarker: failure ledger entries
- RepositorySnapshot: ephemeral drift probe result
- MenuAction / MenuState / ResolutionOutcome: resolver menu model
- PassReport / DomainResult: what a pass did
"""

from .sync_domain import SyncDomain, build_domains, disabled_by_env
from .ledger import FailureRecord, DisabledMarker, parse_ledger_line, DISABLED_TOKEN
from .snapshot import RepositorySnapshot
from .resolution import (
    MenuAction,
    MenuOption,
    MenuState,
    ResolutionOutcome,
    LOCAL_CHANGES_MENU,
    REMOTE_UPDATES_MENU,
    PUSH_CONFIRM_MENU,
)
from .report import DomainStatus, DomainResult, PassReport

__all__ = [
    'SyncDomain',
    'build_domains',
    'disabled_by_env',
    'FailureRecord',
    'DisabledMarker',
    'parse_ledger_line',
    'DISABLED_TOKEN',
    'RepositorySnapshot',
    'MenuAction',
    'MenuOption',
    'MenuState',
    'ResolutionOutcome',
    'LOCAL_CHANGES_MENU',
    'REMOTE_UPDATES_MENU',
    'PUSH_CONFIRM_MENU',
    'DomainStatus',
    'DomainResult',
    'PassReport',
]
