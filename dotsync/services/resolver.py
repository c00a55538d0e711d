"""
Interactive resolver for dotsync.

Presents remediation menus when a domain has drifted and runs the chosen
git operation. Each menu session is a small state machine:

    AWAITING_CHOICE --show status/diff/incoming--> SHOWING_* --> AWAITING_CHOICE
    AWAITING_CHOICE --any other action--> RESOLVED

Dismissing the menu ends the session with no state change, so the same
question comes back at the next eligible check.
"""

import logging
from typing import List, Optional

from rich.console import Console

from ..domain.resolution import (
    INSPECTION_STATES,
    LOCAL_CHANGES_MENU,
    PUSH_CONFIRM_MENU,
    REMOTE_UPDATES_MENU,
    MenuAction,
    MenuOption,
    MenuState,
    ResolutionOutcome,
)
from ..domain.sync_domain import SyncDomain
from ..infra.git_client import GitClient
from ..infra.selector import Selector
from .failure_ledger import FailureLedger
from .timestamp_store import TimestampStore

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_SECONDS = 24 * 60 * 60


class InteractiveResolver:
    """
    Runs the local-changes, remote-updates and push-confirmation menus.

    Successful mutations and the snooze/ignore choices write the timestamp
    store; failed push/pull operations are recorded in the failure ledger.
    """

    def __init__(
        self,
        git_client: GitClient,
        timestamps: TimestampStore,
        ledger: FailureLedger,
        selector: Selector,
        console: Optional[Console] = None,
        ignore_seconds: int = DEFAULT_IGNORE_SECONDS
    ):
        self.git = git_client
        self.timestamps = timestamps
        self.ledger = ledger
        self.selector = selector
        self.console = console or Console()
        self.ignore_seconds = int(ignore_seconds)
        # States visited by the most recent menu session
        self.history: List[MenuState] = []

    # ------------------------------------------------------------------
    # Menu state machine
    # ------------------------------------------------------------------

    def _run_menu(self, domain: SyncDomain, header: str, options: List[MenuOption]) -> Optional[MenuAction]:
        """Drive one menu until a terminal action is chosen or it is dismissed."""
        self.history = []
        state = MenuState.AWAITING_CHOICE
        while True:
            self.history.append(state)

            if state == MenuState.AWAITING_CHOICE:
                choice = self.selector.choose(header, options)
                if choice is None:
                    return None
                if choice.action in INSPECTION_STATES:
                    state = INSPECTION_STATES[choice.action]
                    continue
                self.history.append(MenuState.RESOLVED)
                return choice.action

            self._show(domain, state)
            state = MenuState.AWAITING_CHOICE

    def _show(self, domain: SyncDomain, state: MenuState) -> None:
        path = str(domain.working_copy)
        if state == MenuState.SHOWING_STATUS:
            self.console.print("\n[bold]Git status:[/bold]")
            self.git.show_status(path)
        elif state == MenuState.SHOWING_DIFF:
            self.console.print("\n[bold]Git diff:[/bold]")
            self.git.show_diff(path)
        elif state == MenuState.SHOWING_INCOMING:
            self.console.print("\n[bold]Incoming commits:[/bold]")
            self.git.show_incoming(path, domain.upstream)
        self.console.print("")

    # ------------------------------------------------------------------
    # Menus
    # ------------------------------------------------------------------

    def resolve_local_changes(self, domain: SyncDomain, change_count: int) -> ResolutionOutcome:
        header = f"📝 {domain.display_name}: {change_count} uncommitted changes"
        action = self._run_menu(domain, header, LOCAL_CHANGES_MENU)

        if action is None:
            return ResolutionOutcome.CANCELLED
        if action == MenuAction.COMMIT_AND_PUSH:
            return self._commit_and_push(domain)
        if action == MenuAction.COMMIT_ONLY:
            return self._commit_only(domain)
        return self._defer(action)

    def resolve_remote_updates(self, domain: SyncDomain, commit_count: int) -> ResolutionOutcome:
        header = f"📥 {domain.display_name}: {commit_count} new commits available"
        action = self._run_menu(domain, header, REMOTE_UPDATES_MENU)

        if action is None:
            return ResolutionOutcome.CANCELLED
        if action == MenuAction.PULL:
            return self._pull(domain)
        return self._defer(action)

    def confirm_push(self, domain: SyncDomain) -> ResolutionOutcome:
        header = f"📤 {domain.display_name}: Push committed changes?"
        action = self._run_menu(domain, header, PUSH_CONFIRM_MENU)

        if action == MenuAction.PUSH_NOW:
            self.console.print("\nPushing to remote...")
            if self.git.push(str(domain.working_copy), domain.remote, domain.branch):
                self.console.print("[green]✓ Changes pushed successfully[/green]")
                return ResolutionOutcome.PUSHED
            self._fail(domain, "Push failed")
            return ResolutionOutcome.FAILED

        if action == MenuAction.PUSH_LATER:
            self.console.print("📝 Remember to push manually later")
        return ResolutionOutcome.PUSH_DEFERRED

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _commit(self, domain: SyncDomain) -> bool:
        path = str(domain.working_copy)
        self.console.print("\nCommitting changes...")
        if not self.git.add_all(path) or not self.git.commit(path):
            self.console.print("[red]✗ Commit cancelled or failed[/red]")
            return False
        return True

    def _commit_and_push(self, domain: SyncDomain) -> ResolutionOutcome:
        if not self._commit(domain):
            return ResolutionOutcome.FAILED

        self.console.print("\nPushing to remote...")
        if not self.git.push(str(domain.working_copy), domain.remote, domain.branch):
            self._fail(domain, "Push failed")
            return ResolutionOutcome.FAILED

        self.console.print("[green]✓ Changes committed and pushed[/green]")
        self.timestamps.update()
        return ResolutionOutcome.COMMITTED_AND_PUSHED

    def _commit_only(self, domain: SyncDomain) -> ResolutionOutcome:
        if not self._commit(domain):
            return ResolutionOutcome.FAILED

        self.console.print("[green]✓ Changes committed[/green]")
        self.confirm_push(domain)
        self.timestamps.update()
        return ResolutionOutcome.COMMITTED

    def _pull(self, domain: SyncDomain) -> ResolutionOutcome:
        self.console.print("\nPulling changes...")
        if not self.git.pull(str(domain.working_copy), domain.remote, domain.branch):
            self._fail(domain, "Pull failed")
            return ResolutionOutcome.FAILED

        self.console.print("[green]✓ Changes pulled successfully[/green]")
        self.timestamps.update()
        return ResolutionOutcome.PULLED

    def _defer(self, action: MenuAction) -> ResolutionOutcome:
        if action == MenuAction.SNOOZE:
            self.timestamps.update()
            hours = max(1, self.timestamps.interval // 3600)
            self.console.print(f"⏰ Will remind you in {hours} hours")
            return ResolutionOutcome.SNOOZED

        if action == MenuAction.IGNORE_FOR_DAY:
            self.timestamps.update(self.timestamps.now() + self.ignore_seconds)
            self.console.print("🔕 Ignoring until next day")
            return ResolutionOutcome.IGNORED

        logger.debug(f"Unhandled menu action {action}")
        return ResolutionOutcome.CANCELLED

    def _fail(self, domain: SyncDomain, message: str) -> None:
        self.console.print(f"[red]✗ {message}[/red]")
        self.ledger.record_failure(domain.tag, message)
