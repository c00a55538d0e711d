"""
Tests for menu selectors.
"""

import shutil
import stat

import pytest
from click.testing import CliRunner

from dotsync.domain.resolution import REMOTE_UPDATES_MENU, MenuAction
from dotsync.infra.selector import FzfSelector, PromptSelector, make_selector


def fake_fzf(tmp_path, body):
    """Executable standing in for fzf."""
    script = tmp_path / "fzf"
    script.write_text("#!/bin/sh\n" + body + "\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return str(script)


class TestPromptSelector:

    def choose(self, text):
        with CliRunner().isolation(input=text):
            return PromptSelector().choose("📥 Dotfiles: 2 new commits available", REMOTE_UPDATES_MENU)

    def test_number_picks_option(self):
        assert self.choose("1\n").action == MenuAction.PULL

    def test_zero_dismisses(self):
        assert self.choose("0\n") is None

    def test_empty_input_dismisses(self):
        assert self.choose("\n") is None

    def test_out_of_range_reprompts(self):
        assert self.choose("9\n3\n").action == MenuAction.SNOOZE


@pytest.mark.skipif(shutil.which("sh") is None, reason="sh not available")
class TestFzfSelector:

    def test_picks_first_line(self, tmp_path):
        selector = FzfSelector(fzf=fake_fzf(tmp_path, "head -n 1"))
        assert selector.choose("header", REMOTE_UPDATES_MENU).action == MenuAction.PULL

    def test_escape_dismisses(self, tmp_path):
        selector = FzfSelector(fzf=fake_fzf(tmp_path, "cat > /dev/null; exit 130"))
        assert selector.choose("header", REMOTE_UPDATES_MENU) is None

    def test_missing_binary(self, tmp_path):
        selector = FzfSelector(fzf=str(tmp_path / "no-fzf"))
        assert selector.choose("header", REMOTE_UPDATES_MENU) is None


class TestMakeSelector:

    def test_explicit_kinds(self):
        assert isinstance(make_selector("prompt"), PromptSelector)
        assert isinstance(make_selector("fzf"), FzfSelector)

    def test_auto_without_fzf(self, monkeypatch):
        monkeypatch.setattr(shutil, "which", lambda name: None)
        assert isinstance(make_selector("auto"), PromptSelector)
