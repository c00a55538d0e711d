"""
Repository prober for dotsync.

Read-only questions about a domain's working copy. Fetch failures are
treated as "no updates" so a flaky network never produces a prompt.
"""

import logging
from typing import Optional

from ..domain.snapshot import RepositorySnapshot
from ..domain.sync_domain import SyncDomain
from ..infra.git_client import GitClient

logger = logging.getLogger(__name__)


class RepositoryProber:
    """Inspects local and remote state of a SyncDomain."""

    def __init__(self, git_client: Optional[GitClient] = None):
        self.git = git_client or GitClient()

    def is_valid_repo(self, domain: SyncDomain) -> bool:
        """True if the domain has a path that is a usable git repository."""
        path = domain.working_copy
        if path is None or not path.is_dir():
            return False
        return self.git.is_git_repo(str(path))

    def change_count(self, domain: SyncDomain) -> int:
        return len(self.git.changed_files(str(domain.working_copy)))

    def has_local_changes(self, domain: SyncDomain) -> bool:
        """
        Raises:
            GitCommandError: If git status fails
        """
        return self.change_count(domain) > 0

    def commits_behind(self, domain: SyncDomain) -> int:
        return self.git.commits_behind(str(domain.working_copy), domain.upstream)

    def remote_commits(self, domain: SyncDomain) -> Optional[int]:
        """Fetch, then count upstream commits HEAD lacks. None if the fetch failed."""
        if not self.git.fetch(str(domain.working_copy), domain.remote):
            logger.debug(f"Fetch failed for {domain.name}; assuming no remote updates")
            return None
        return self.commits_behind(domain)

    def has_remote_updates(self, domain: SyncDomain) -> bool:
        return (self.remote_commits(domain) or 0) > 0

    def snapshot(self, domain: SyncDomain, include_remote: bool = True) -> RepositorySnapshot:
        """
        Probe a domain in one go.

        Local changes come first; when there are any (or include_remote is
        False) the remote is not fetched.
        """
        changes = self.change_count(domain) if domain.track_local_changes else 0
        if changes or not include_remote:
            return RepositorySnapshot(
                has_uncommitted_changes=changes > 0,
                change_count=changes,
            )

        behind = self.remote_commits(domain)
        if behind is None:
            return RepositorySnapshot(fetch_ok=False)
        return RepositorySnapshot(commits_behind_remote=behind)
