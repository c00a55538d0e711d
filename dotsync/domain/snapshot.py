"""
Repository snapshot for dotsync.

Computed fresh on every probe and never persisted.
"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class RepositorySnapshot:
    """Local/remote drift of one working copy at probe time."""
    has_uncommitted_changes: bool = False
    change_count: int = 0
    commits_behind_remote: int = 0
    fetch_ok: bool = True

    @property
    def has_remote_updates(self) -> bool:
        return self.fetch_ok and self.commits_behind_remote > 0

    @property
    def in_sync(self) -> bool:
        return not self.has_uncommitted_changes and not self.has_remote_updates

    def to_dict(self) -> Dict[str, Any]:
        return {
            'has_uncommitted_changes': self.has_uncommitted_changes,
            'change_count': self.change_count,
            'commits_behind_remote': self.commits_behind_remote,
            'fetch_ok': self.fetch_ok,
        }
