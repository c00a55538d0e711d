"""
Sync orchestrator for dotsync.

The entry point run before every shell prompt. It is cheap when there is
nothing to do (two fast-exit gates), and when the interval has elapsed it
walks each domain in order: bootstrap, validate, probe, resolve, run the
change detector. A failure in one domain is recorded and the next domain
still runs. Nothing here raises to the caller.
"""

import os
import logging
from typing import Dict, List, Mapping, Optional, Tuple

from rich.console import Console

from ..domain.report import DomainResult, DomainStatus, PassReport
from ..domain.resolution import ResolutionOutcome
from ..domain.sync_domain import SyncDomain, disabled_by_env
from ..infra.git_client import GitClient
from .change_detector import ChangeDetectorRunner
from .failure_ledger import FailureLedger
from .prober import RepositoryProber
from .resolver import InteractiveResolver
from .timestamp_store import TimestampStore

logger = logging.getLogger(__name__)


class SyncOrchestrator:
    """
    Composes the stores, prober and resolver into one pass.

    Example:
        orchestrator = DotSync().orchestrator
        report = orchestrator.run_pass()
        if report.ran:
            print(report.to_dict())
    """

    def __init__(
        self,
        domains: List[SyncDomain],
        timestamps: TimestampStore,
        ledger: FailureLedger,
        prober: RepositoryProber,
        resolver: InteractiveResolver,
        git_client: Optional[GitClient] = None,
        detector: Optional[ChangeDetectorRunner] = None,
        env: Optional[Mapping[str, str]] = None,
        console: Optional[Console] = None
    ):
        self.domains = list(domains)
        self.timestamps = timestamps
        self.ledger = ledger
        self.prober = prober
        self.resolver = resolver
        self.git = git_client or prober.git
        self.detector = detector or ChangeDetectorRunner()
        self.env = os.environ if env is None else env
        self.console = console or Console()

    def gate(self, force: bool = False) -> Optional[str]:
        """Return why a pass should not run, or None if it should."""
        var = disabled_by_env(self.domains, self.env)
        if var:
            return f"disabled by {var}"
        if not self.ledger.is_enabled():
            return "disabled by circuit breaker"
        if not force and not self.timestamps.should_check():
            return "interval not elapsed"
        return None

    def run_pass(self, force: bool = False) -> PassReport:
        """
        Run one orchestration pass.

        Args:
            force: Ignore the interval gate (the disable gates still apply)

        Returns:
            PassReport describing what happened per domain
        """
        report = PassReport()

        reason = self.gate(force=force)
        if reason:
            report.skip_reason = reason
            logger.debug(f"Sync pass skipped: {reason}")
            return report

        report.ran = True
        before = self.timestamps.last_check()

        for domain in self.domains:
            if not self.ledger.is_enabled():
                report.add(DomainResult(
                    domain=domain.name,
                    status=DomainStatus.SKIPPED,
                    action="disabled",
                    message="circuit breaker tripped during this pass",
                ))
                continue
            report.add(self.check_domain(domain))

        if report.any_success:
            self.timestamps.touch()
        report.timestamp_updated = self.timestamps.last_check() != before

        return report

    def check_domain(self, domain: SyncDomain) -> DomainResult:
        """Bootstrap, validate and check a single domain."""
        path = domain.working_copy
        if path is None:
            return DomainResult(domain.name, DomainStatus.SKIPPED, "not_configured", message="no path set")

        cloned = False
        if not path.exists():
            if not domain.clone_url:
                return DomainResult(domain.name, DomainStatus.SKIPPED, "not_configured",
                                    message=f"{path} does not exist")
            if not self.bootstrap(domain):
                return DomainResult(domain.name, DomainStatus.FAILED, "clone_failed",
                                    message="Clone failed")
            cloned = True

        if not self.prober.is_valid_repo(domain):
            return DomainResult(domain.name, DomainStatus.SKIPPED, "not_a_repository",
                                message=f"{path} is not a git repository", cloned=cloned)

        try:
            action, outcome = self.inspect(domain)
        except Exception as e:
            logger.warning(f"Sync check failed for {domain.name}: {e}")
            self.console.print(f"[red]✗ {domain.display_name}: sync check failed[/red]")
            self.ledger.record_failure(domain.tag, "Check sync failed")
            return DomainResult(domain.name, DomainStatus.FAILED, "check_failed",
                                message=str(e), cloned=cloned)

        detector = self.detector.run(domain)
        message = None
        if not detector.ok:
            message = f"change detector exited with {detector.returncode}"

        return DomainResult(domain.name, DomainStatus.CHECKED, action,
                            message=message, outcome=outcome, cloned=cloned)

    def inspect(self, domain: SyncDomain) -> Tuple[str, Optional[ResolutionOutcome]]:
        """
        Probe the domain and hand drift to the resolver.

        Local changes win over remote updates; remote updates are looked
        at again once the working copy is clean.
        """
        snapshot = self.prober.snapshot(domain)

        if snapshot.has_uncommitted_changes:
            outcome = self.resolver.resolve_local_changes(domain, snapshot.change_count)
            return "local_changes", outcome

        if snapshot.has_remote_updates:
            outcome = self.resolver.resolve_remote_updates(domain, snapshot.commits_behind_remote)
            return "remote_updates", outcome

        if not snapshot.fetch_ok:
            return "fetch_failed", None

        return "in_sync", None

    def bootstrap(self, domain: SyncDomain) -> bool:
        """Clone a missing working copy from the domain's clone URL."""
        self.console.print(f"📦 Cloning {domain.display_name} from {domain.clone_url}...")
        if self.git.clone(domain.clone_url, str(domain.working_copy)):
            self.console.print(f"[green]✓ {domain.display_name} cloned successfully[/green]")
            return True

        self.console.print(f"[red]✗ Failed to clone {domain.display_name}[/red]")
        self.ledger.record_failure(domain.tag, "Clone failed")
        return False

    def describe(self) -> Dict[str, object]:
        """Snapshot of gate state for `dotsync status`."""
        marker = self.ledger.disabled_marker()
        return {
            'enabled': self.gate(force=True) is None,
            'env_disabled': disabled_by_env(self.domains, self.env),
            'breaker_tripped': marker is not None,
            'breaker_reason': marker.reason if marker else None,
            'last_check': self.timestamps.last_check(),
            'next_check_due': self.timestamps.next_check_due(),
            'due': self.timestamps.should_check(),
            'recent_failures': self.ledger.recent_failure_count(),
            'domains': [d.to_dict() for d in self.domains],
        }
