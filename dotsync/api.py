"""
High-level Python API for dotsync.

Wires configuration, state backends, git client and selector into a
ready-to-run orchestrator.

Example:
    import dotsync

    ds = dotsync.DotSync()

    # What the precmd hook runs
    report = ds.check()

    # Inspect state
    print(ds.status())

    # Re-enable after the breaker tripped
    ds.clear_failures()

    # Low-level access to services
    ds.timestamps
    ds.ledger
    ds.orchestrator
"""

import os
import time
from typing import Any, Callable, Dict, Mapping, Optional
import logging

from rich.console import Console

from .config import load_config
from .exit_codes import ConfigError
from .domain import PassReport, build_domains
from .infra import (
    FileLedgerBackend,
    FileTimestampBackend,
    GitClient,
    LedgerBackend,
    Selector,
    TimestampBackend,
    default_state_paths,
    make_selector,
)
from .services import (
    ChangeDetectorRunner,
    FailureLedger,
    InteractiveResolver,
    RepositoryProber,
    SyncOrchestrator,
    TimestampStore,
)

logger = logging.getLogger(__name__)


class DotSync:
    """
    High-level API for dotsync.

    Every collaborator can be injected, which is how the tests swap in
    in-memory stores, a mocked GitClient and a scripted selector.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        env: Optional[Mapping[str, str]] = None,
        console: Optional[Console] = None,
        selector: Optional[Selector] = None,
        git_client: Optional[GitClient] = None,
        timestamp_backend: Optional[TimestampBackend] = None,
        ledger_backend: Optional[LedgerBackend] = None,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize DotSync.

        Args:
            config: Full config dict (default: load_config())
            env: Environment mapping (default: os.environ)
            console: Rich console for user-facing messages
            selector: Menu selector (default: from ui.selector)
            git_client: GitClient instance
            timestamp_backend: Storage for the last-check timestamp
            ledger_backend: Storage for the failure ledger
            clock: Time source returning epoch seconds
        """
        self.env = os.environ if env is None else env
        self.config = config if config is not None else load_config(env=self.env)
        self.console = console or Console()

        general = self.config.get('general', {})
        breaker = self.config.get('circuit_breaker', {})

        state_path, ledger_path = default_state_paths(general.get('state_dir'))
        self.timestamp_backend = timestamp_backend or FileTimestampBackend(state_path)
        self.ledger_backend = ledger_backend or FileLedgerBackend(ledger_path)

        self.git = git_client or GitClient(timeout=general.get('git_timeout_seconds'))
        self.selector = selector or make_selector(self.config.get('ui', {}).get('selector', 'auto'))
        self.domains = build_domains(self.config)

        self.timestamps = TimestampStore(
            self.timestamp_backend,
            interval=general.get('interval_seconds', 4 * 60 * 60),
            clock=clock,
        )
        try:
            self.ledger = FailureLedger(
                self.ledger_backend,
                max_failures=breaker.get('max_failures', 3),
                window=breaker.get('window_seconds', 60 * 60),
                scope=breaker.get('scope', 'global'),
                clock=clock,
                console=self.console,
            )
        except ValueError as e:
            raise ConfigError(str(e))
        self.prober = RepositoryProber(self.git)
        self.resolver = InteractiveResolver(
            self.git,
            self.timestamps,
            self.ledger,
            self.selector,
            console=self.console,
            ignore_seconds=general.get('ignore_seconds', 24 * 60 * 60),
        )
        self.orchestrator = SyncOrchestrator(
            self.domains,
            self.timestamps,
            self.ledger,
            self.prober,
            self.resolver,
            git_client=self.git,
            detector=ChangeDetectorRunner(timeout=general.get('git_timeout_seconds')),
            env=self.env,
            console=self.console,
        )

    def check(self, force: bool = False) -> PassReport:
        """Run one orchestration pass."""
        return self.orchestrator.run_pass(force=force)

    def status(self) -> Dict[str, Any]:
        """Gate and state summary."""
        info = self.orchestrator.describe()
        info['state_file'] = self.timestamp_backend.describe()
        info['ledger_file'] = self.ledger_backend.describe()
        info['failures'] = [r.to_dict() for r in self.ledger.records()]
        return info

    def clear_failures(self) -> bool:
        """Delete the failure ledger. Returns True if anything was removed."""
        return self.ledger.clear()


def create(config: Optional[Dict[str, Any]] = None, **kwargs) -> DotSync:
    """
    Create a DotSync instance.

    Convenience function for:
        ds = dotsync.create()

    Args:
        config: Full config dict
        **kwargs: Additional arguments passed to DotSync

    Returns:
        Configured DotSync instance
    """
    return DotSync(config=config, **kwargs)
