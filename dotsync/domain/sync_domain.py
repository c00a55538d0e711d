"""
SyncDomain descriptor for dotsync.

A SyncDomain names one tracked git working copy together with the remote
it is compared against. The orchestrator treats every domain the same
way; everything domain-specific lives in the descriptor.
"""

import os
from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Mapping
from pathlib import Path


@dataclass(frozen=True)
class SyncDomain:
    """One independently tracked repository."""
    name: str
    path: Optional[str] = None
    remote: str = "origin"
    branch: str = "main"
    clone_url: Optional[str] = None
    disable_env: Optional[str] = None
    track_local_changes: bool = True
    change_detector: Optional[str] = None
    ledger_tag: Optional[str] = None
    label: Optional[str] = None

    @property
    def upstream(self) -> str:
        """Remote tracking ref, e.g. ``origin/main``."""
        return f"{self.remote}/{self.branch}"

    @property
    def tag(self) -> str:
        """Token written to the failure ledger for this domain."""
        return self.ledger_tag or self.name

    @property
    def display_name(self) -> str:
        """Human label used in menu headers."""
        if self.label:
            return self.label
        return self.name.replace('-', ' ').capitalize()

    @property
    def working_copy(self) -> Optional[Path]:
        if not self.path:
            return None
        return Path(self.path).expanduser()

    @property
    def change_detector_path(self) -> Optional[Path]:
        if not self.change_detector or self.working_copy is None:
            return None
        return self.working_copy / self.change_detector

    def is_disabled(self, env: Mapping[str, str]) -> bool:
        """True if this domain's disable variable is set to a non-empty value."""
        return bool(self.disable_env and env.get(self.disable_env))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SyncDomain':
        """Build a descriptor from a configuration entry."""
        return cls(
            name=data['name'],
            path=data.get('path') or None,
            remote=data.get('remote') or "origin",
            branch=data.get('branch') or "main",
            clone_url=data.get('clone_url') or None,
            disable_env=data.get('disable_env') or None,
            track_local_changes=bool(data.get('track_local_changes', True)),
            change_detector=data.get('change_detector') or None,
            ledger_tag=data.get('ledger_tag') or None,
            label=data.get('label') or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'path': str(self.working_copy) if self.working_copy else None,
            'remote': self.remote,
            'branch': self.branch,
            'clone_url': self.clone_url,
            'track_local_changes': self.track_local_changes,
            'change_detector': self.change_detector,
        }


def build_domains(config: Dict[str, Any]) -> List[SyncDomain]:
    """Build the ordered list of domains from a loaded configuration."""
    return [SyncDomain.from_dict(entry) for entry in config.get('domains', []) if entry.get('name')]


def disabled_by_env(domains: List[SyncDomain], env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """
    Return the name of the variable that disables sync, if any.

    SYNC_DISABLED or any domain's own variable switches the whole pass off.
    """
    from ..config import GLOBAL_DISABLE_ENV

    env = os.environ if env is None else env
    if env.get(GLOBAL_DISABLE_ENV):
        return GLOBAL_DISABLE_ENV
    for domain in domains:
        if domain.is_disabled(env):
            return domain.disable_env
    return None
