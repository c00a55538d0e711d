"""
Menu model for the interactive resolver.

Menus are ordered lists of MenuOption; the resolver walks a small state
machine over MenuState instead of dispatching on label strings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class MenuAction(Enum):
    """Everything a user can pick from a resolver menu."""
    COMMIT_AND_PUSH = "commit_and_push"
    COMMIT_ONLY = "commit_only"
    SHOW_STATUS = "show_status"
    SHOW_DIFF = "show_diff"
    PULL = "pull"
    SHOW_INCOMING = "show_incoming"
    PUSH_NOW = "push_now"
    PUSH_LATER = "push_later"
    SNOOZE = "snooze"
    IGNORE_FOR_DAY = "ignore_for_day"


class MenuState(Enum):
    """States of one resolver menu session."""
    AWAITING_CHOICE = "awaiting_choice"
    SHOWING_STATUS = "showing_status"
    SHOWING_DIFF = "showing_diff"
    SHOWING_INCOMING = "showing_incoming"
    RESOLVED = "resolved"


class ResolutionOutcome(Enum):
    """How a resolver session ended."""
    COMMITTED_AND_PUSHED = "committed_and_pushed"
    COMMITTED = "committed"
    PULLED = "pulled"
    PUSHED = "pushed"
    PUSH_DEFERRED = "push_deferred"
    SNOOZED = "snoozed"
    IGNORED = "ignored"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class MenuOption:
    action: MenuAction
    label: str


# Actions that display something and then return to the same menu
INSPECTION_STATES = {
    MenuAction.SHOW_STATUS: MenuState.SHOWING_STATUS,
    MenuAction.SHOW_DIFF: MenuState.SHOWING_DIFF,
    MenuAction.SHOW_INCOMING: MenuState.SHOWING_INCOMING,
}


def _menu(*entries: Tuple[MenuAction, str]) -> List[MenuOption]:
    return [MenuOption(action, label) for action, label in entries]


LOCAL_CHANGES_MENU = _menu(
    (MenuAction.COMMIT_AND_PUSH, "Commit and push now"),
    (MenuAction.COMMIT_ONLY, "Commit only (no push)"),
    (MenuAction.SHOW_STATUS, "Show git status"),
    (MenuAction.SHOW_DIFF, "Show git diff"),
    (MenuAction.SNOOZE, "Remind me later (4h)"),
    (MenuAction.IGNORE_FOR_DAY, "Ignore for this session"),
)

REMOTE_UPDATES_MENU = _menu(
    (MenuAction.PULL, "Pull changes now"),
    (MenuAction.SHOW_INCOMING, "Show incoming commits"),
    (MenuAction.SNOOZE, "Remind me later (4h)"),
    (MenuAction.IGNORE_FOR_DAY, "Ignore for this session"),
)

PUSH_CONFIRM_MENU = _menu(
    (MenuAction.PUSH_NOW, "Push to remote now"),
    (MenuAction.PUSH_LATER, "Push later (manual)"),
)
