"""
Shared fixtures for dotsync tests.
"""

import io
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from dotsync.api import DotSync
from dotsync.config import get_default_config
from dotsync.infra.git_client import GitClient
from dotsync.infra.selector import Selector
from dotsync.infra.state_store import MemoryLedgerBackend, MemoryTimestampBackend

NOW = 1_700_000_000


class ScriptedSelector(Selector):
    """Selector that replays a fixed list of choices (MenuAction or None to dismiss)."""

    def __init__(self, choices=()):
        self.choices = list(choices)
        self.headers = []
        self.menus = []

    def choose(self, header, options):
        self.headers.append(header)
        self.menus.append([option.action for option in options])
        if not self.choices:
            return None
        wanted = self.choices.pop(0)
        if wanted is None:
            return None
        for option in options:
            if option.action == wanted:
                return option
        raise AssertionError(f"{wanted} not offered in menu '{header}'")


class FakeClock:
    """Callable clock returning a settable epoch second."""

    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def console():
    return Console(file=io.StringIO(), force_terminal=False, width=120)


@pytest.fixture
def git():
    """GitClient mock describing clean, up-to-date repositories."""
    client = MagicMock(spec=GitClient)
    client.is_git_repo.return_value = True
    client.changed_files.return_value = []
    client.fetch.return_value = True
    client.commits_behind.return_value = 0
    client.add_all.return_value = True
    client.commit.return_value = True
    client.push.return_value = True
    client.pull.return_value = True
    client.clone.return_value = True
    client.show_status.return_value = 0
    client.show_diff.return_value = 0
    client.show_incoming.return_value = 0
    return client


@pytest.fixture
def repo_dirs(tmp_path):
    """Working-copy directories for both default domains."""
    dotfiles = tmp_path / "dotfiles"
    claude = tmp_path / "claude"
    for path in (dotfiles, claude):
        (path / ".git").mkdir(parents=True)
    return {"dotfiles": dotfiles, "agent-config": claude}


def make_config(paths, **domain_overrides):
    """Default config with domain paths replaced (None leaves a domain unset)."""
    config = get_default_config()
    for domain in config["domains"]:
        name = domain["name"]
        path = paths.get(name)
        domain["path"] = str(path) if path else ""
        domain.update(domain_overrides.get(name, {}))
    return config


@pytest.fixture
def make_dotsync(git, clock, console):
    """Factory building a DotSync wired to in-memory state and the git mock."""

    def factory(paths, choices=(), env=None, timestamp=None, ledger_lines=None, **domain_overrides):
        selector = ScriptedSelector(choices)
        ds = DotSync(
            config=make_config(paths, **domain_overrides),
            env=env or {},
            console=console,
            selector=selector,
            git_client=git,
            timestamp_backend=MemoryTimestampBackend(timestamp),
            ledger_backend=MemoryLedgerBackend(ledger_lines),
            clock=clock,
        )
        ds.test_selector = selector
        return ds

    return factory
