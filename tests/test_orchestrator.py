"""
Tests for SyncOrchestrator passes.
"""

import pytest

from dotsync.domain import DomainStatus
from dotsync.domain.resolution import MenuAction, ResolutionOutcome
from dotsync.exit_codes import GitCommandError

from conftest import NOW

FOUR_HOURS = 4 * 60 * 60


class TestGates:

    def test_global_disable_variable(self, make_dotsync, repo_dirs, git):
        ds = make_dotsync(repo_dirs, env={"SYNC_DISABLED": "1"})

        report = ds.check()

        assert not report.ran
        assert report.skip_reason == "disabled by SYNC_DISABLED"
        git.changed_files.assert_not_called()
        assert ds.timestamp_backend.writes == []

    def test_domain_disable_variable_stops_pass(self, make_dotsync, repo_dirs, git):
        ds = make_dotsync(repo_dirs, env={"CLAUDE_SYNC_DISABLED": "yes"})

        report = ds.check(force=True)

        assert report.skip_reason == "disabled by CLAUDE_SYNC_DISABLED"
        git.fetch.assert_not_called()

    def test_empty_disable_variable_is_ignored(self, make_dotsync, repo_dirs):
        ds = make_dotsync(repo_dirs, env={"SYNC_DISABLED": ""})
        assert ds.check().ran

    def test_breaker_gate(self, make_dotsync, repo_dirs, git):
        ds = make_dotsync(repo_dirs, ledger_lines=["DISABLED:1:Too many failures (3)"])

        report = ds.check(force=True)

        assert report.skip_reason == "disabled by circuit breaker"
        git.is_git_repo.assert_not_called()

    def test_interval_gate(self, make_dotsync, repo_dirs, git):
        ds = make_dotsync(repo_dirs, timestamp=NOW - FOUR_HOURS + 1)

        report = ds.check()

        assert report.skip_reason == "interval not elapsed"
        git.changed_files.assert_not_called()

    def test_force_bypasses_interval_only(self, make_dotsync, repo_dirs):
        ds = make_dotsync(repo_dirs, timestamp=NOW)
        assert ds.check(force=True).ran


class TestPass:

    def test_clean_pass_updates_timestamp(self, make_dotsync, repo_dirs, git):
        ds = make_dotsync(repo_dirs)

        report = ds.check()

        assert report.ran
        assert [d.action for d in report.domains] == ["in_sync", "in_sync"]
        assert report.timestamp_updated
        assert ds.timestamp_backend.value == NOW
        assert git.fetch.call_count == 2

    def test_second_pass_is_noop(self, make_dotsync, repo_dirs, git):
        ds = make_dotsync(repo_dirs)

        ds.check()
        report = ds.check()

        assert not report.ran
        assert git.fetch.call_count == 2

    def test_due_again_after_interval(self, make_dotsync, repo_dirs, git, clock):
        ds = make_dotsync(repo_dirs)
        ds.check()

        clock.advance(FOUR_HOURS)

        assert ds.check().ran
        assert ds.timestamp_backend.value == NOW + FOUR_HOURS

    def test_unconfigured_domains_are_skipped(self, make_dotsync, git):
        ds = make_dotsync({})

        report = ds.check()

        assert [d.status for d in report.domains] == [DomainStatus.SKIPPED, DomainStatus.SKIPPED]
        assert not report.timestamp_updated
        assert ds.ledger_backend.lines == []

    def test_missing_dir_without_clone_url(self, make_dotsync, tmp_path, git):
        ds = make_dotsync({"dotfiles": tmp_path / "missing"})

        report = ds.check()

        assert report.domains[0].action == "not_configured"
        git.clone.assert_not_called()

    def test_not_a_repository(self, make_dotsync, repo_dirs, git):
        git.is_git_repo.return_value = False
        ds = make_dotsync(repo_dirs)

        report = ds.check()

        assert [d.action for d in report.domains] == ["not_a_repository", "not_a_repository"]
        assert ds.ledger_backend.lines == []

    def test_domain_failure_does_not_stop_next(self, make_dotsync, repo_dirs, git):
        git.changed_files.side_effect = GitCommandError("git status failed")
        ds = make_dotsync(repo_dirs)

        report = ds.check()

        dotfiles, claude = report.domains
        assert dotfiles.status == DomainStatus.FAILED
        assert dotfiles.action == "check_failed"
        # agent-config does not run git status, so it still checks cleanly
        assert claude.status == DomainStatus.CHECKED
        assert ds.ledger_backend.lines == [f"{NOW}:dotfiles:Check sync failed"]
        assert ds.timestamp_backend.value == NOW

    def test_all_domains_failing_leaves_timestamp(self, make_dotsync, repo_dirs, git):
        git.changed_files.side_effect = GitCommandError("boom")
        ds = make_dotsync(repo_dirs, **{"agent-config": {"track_local_changes": True}})

        report = ds.check()

        assert report.failed == 2
        assert not report.timestamp_updated
        assert ds.timestamp_backend.value is None

    def test_local_changes_take_precedence(self, make_dotsync, repo_dirs, git):
        git.changed_files.return_value = [" M .zshrc"]
        git.commits_behind.return_value = 5
        ds = make_dotsync(repo_dirs, choices=[None])

        report = ds.check()

        assert report.domains[0].action == "local_changes"
        assert report.domains[0].outcome == ResolutionOutcome.CANCELLED
        assert ds.test_selector.headers[0] == "📝 Dotfiles: 1 uncommitted changes"
        # Only agent-config fetched
        git.fetch.assert_called_once_with(str(repo_dirs["agent-config"]), "origin")

    def test_fetch_failure_is_not_recorded(self, make_dotsync, repo_dirs, git):
        git.fetch.return_value = False
        ds = make_dotsync(repo_dirs)

        report = ds.check()

        assert [d.action for d in report.domains] == ["fetch_failed", "fetch_failed"]
        assert ds.ledger_backend.lines == []
        assert ds.test_selector.headers == []
        assert report.timestamp_updated


class TestScenarios:

    def test_commit_and_push(self, make_dotsync, repo_dirs, git):
        git.changed_files.return_value = [" M .zshrc", "?? .gitconfig"]
        ds = make_dotsync(repo_dirs, choices=[MenuAction.COMMIT_AND_PUSH])

        report = ds.check()

        assert report.domains[0].outcome == ResolutionOutcome.COMMITTED_AND_PUSHED
        assert ds.timestamp_backend.value == NOW
        assert ds.ledger_backend.lines == []

    def test_ignore_for_day_survives_pass(self, make_dotsync, repo_dirs, git, clock):
        git.commits_behind.side_effect = [3, 0]
        ds = make_dotsync(repo_dirs, choices=[MenuAction.IGNORE_FOR_DAY])

        report = ds.check()

        assert report.domains[0].outcome == ResolutionOutcome.IGNORED
        assert ds.timestamp_backend.value == NOW + 86400

        clock.advance(FOUR_HOURS + 1)
        assert ds.timestamps.should_check() is False
        assert not ds.check().ran

    def test_clone_when_missing(self, make_dotsync, repo_dirs, tmp_path, git, console):
        target = tmp_path / "fresh-claude"

        def fake_clone(url, dest):
            (target / ".git").mkdir(parents=True)
            return True

        git.clone.side_effect = fake_clone
        ds = make_dotsync(
            {"dotfiles": repo_dirs["dotfiles"], "agent-config": target},
            **{"agent-config": {"clone_url": "https://example.com/claude.git"}},
        )

        report = ds.check()

        claude = report.domains[1]
        assert claude.cloned
        assert claude.status == DomainStatus.CHECKED
        git.clone.assert_called_once_with("https://example.com/claude.git", str(target))
        assert "Claude config cloned successfully" in console.file.getvalue()

    def test_clone_failure_is_recorded(self, make_dotsync, repo_dirs, tmp_path, git):
        git.clone.return_value = False
        ds = make_dotsync(
            {"dotfiles": repo_dirs["dotfiles"], "agent-config": tmp_path / "nope"},
            **{"agent-config": {"clone_url": "https://example.com/claude.git"}},
        )

        report = ds.check()

        assert report.domains[1].action == "clone_failed"
        assert ds.ledger_backend.lines == [f"{NOW}:claude:Clone failed"]
        # dotfiles still succeeded
        assert ds.timestamp_backend.value == NOW


class TestBreaker:

    def test_trip_mid_pass_skips_remaining_domains(self, make_dotsync, repo_dirs, git):
        git.changed_files.side_effect = GitCommandError("boom")
        ds = make_dotsync(repo_dirs, ledger_lines=[
            f"{NOW - 60}:claude:Clone failed",
            f"{NOW - 30}:claude:Pull failed",
        ])

        report = ds.check()

        assert report.domains[0].status == DomainStatus.FAILED
        assert report.domains[1].action == "disabled"
        assert not ds.ledger.is_enabled()

    def test_recovery_after_clear(self, make_dotsync, repo_dirs, git):
        ds = make_dotsync(repo_dirs, ledger_lines=["DISABLED:1:Too many failures (3)"])
        assert not ds.check().ran

        assert ds.clear_failures() is True

        assert ds.check().ran

    def test_global_scope_counts_all_domains(self, make_dotsync, repo_dirs, git):
        git.fetch.return_value = True
        git.commits_behind.return_value = 1
        git.pull.return_value = False
        ds = make_dotsync(
            repo_dirs,
            choices=[MenuAction.PULL, MenuAction.PULL],
            ledger_lines=[f"{NOW - 100}:dotfiles:Push failed"],
        )

        ds.check()

        assert not ds.ledger.is_enabled()


class TestStatus:

    def test_describe(self, make_dotsync, repo_dirs):
        ds = make_dotsync(repo_dirs, timestamp=NOW - 60, ledger_lines=[f"{NOW - 10}:dotfiles:Push failed"])

        info = ds.status()

        assert info["enabled"] is True
        assert info["last_check"] == NOW - 60
        assert info["next_check_due"] == NOW - 60 + FOUR_HOURS
        assert info["due"] is False
        assert info["recent_failures"] == 1
        assert info["failures"][0]["message"] == "Push failed"
        assert [d["name"] for d in info["domains"]] == ["dotfiles", "agent-config"]

    def test_describe_disabled(self, make_dotsync, repo_dirs):
        ds = make_dotsync(repo_dirs, env={"DOTFILES_SYNC_DISABLED": "1"})

        info = ds.status()

        assert info["enabled"] is False
        assert info["env_disabled"] == "DOTFILES_SYNC_DISABLED"
