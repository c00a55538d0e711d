"""
Unit tests for dotsync domain objects.
"""

from pathlib import Path

import pytest

from dotsync.domain import (
    DomainResult,
    DomainStatus,
    PassReport,
    RepositorySnapshot,
    SyncDomain,
    build_domains,
    disabled_by_env,
)
from dotsync.domain.resolution import ResolutionOutcome


class TestSyncDomain:

    def test_defaults(self):
        domain = SyncDomain(name="dotfiles", path="~/.dotfiles")

        assert domain.upstream == "origin/main"
        assert domain.tag == "dotfiles"
        assert domain.display_name == "Dotfiles"
        assert domain.working_copy == Path.home() / ".dotfiles"

    def test_ledger_tag_and_label(self):
        domain = SyncDomain(name="agent-config", ledger_tag="claude", label="Claude config")
        assert domain.tag == "claude"
        assert domain.display_name == "Claude config"

    def test_display_name_from_name(self):
        assert SyncDomain(name="work-notes").display_name == "Work notes"

    def test_unset_path(self):
        domain = SyncDomain(name="dotfiles", change_detector="scripts/x.sh")
        assert domain.working_copy is None
        assert domain.change_detector_path is None

    def test_change_detector_path(self, tmp_path):
        domain = SyncDomain(name="agent-config", path=str(tmp_path), change_detector="scripts/x.sh")
        assert domain.change_detector_path == tmp_path / "scripts" / "x.sh"

    def test_from_dict_blank_values_fall_back(self):
        domain = SyncDomain.from_dict({
            'name': 'dotfiles',
            'path': '',
            'remote': '',
            'branch': None,
            'clone_url': '',
        })
        assert domain.path is None
        assert domain.remote == "origin"
        assert domain.branch == "main"
        assert domain.clone_url is None

    def test_is_disabled(self):
        domain = SyncDomain(name="dotfiles", disable_env="DOTFILES_SYNC_DISABLED")
        assert domain.is_disabled({"DOTFILES_SYNC_DISABLED": "1"})
        assert not domain.is_disabled({"DOTFILES_SYNC_DISABLED": ""})
        assert not domain.is_disabled({})


class TestDisabledByEnv:

    @pytest.fixture
    def domains(self):
        return build_domains({'domains': [
            {'name': 'dotfiles', 'disable_env': 'DOTFILES_SYNC_DISABLED'},
            {'name': 'agent-config', 'disable_env': 'CLAUDE_SYNC_DISABLED'},
        ]})

    def test_global_wins(self, domains):
        env = {'SYNC_DISABLED': '1', 'CLAUDE_SYNC_DISABLED': '1'}
        assert disabled_by_env(domains, env) == 'SYNC_DISABLED'

    def test_domain_variable(self, domains):
        assert disabled_by_env(domains, {'CLAUDE_SYNC_DISABLED': 'true'}) == 'CLAUDE_SYNC_DISABLED'

    def test_nothing_set(self, domains):
        assert disabled_by_env(domains, {}) is None


class TestSnapshot:

    def test_failed_fetch_hides_remote_updates(self):
        snapshot = RepositorySnapshot(commits_behind_remote=4, fetch_ok=False)
        assert not snapshot.has_remote_updates
        assert snapshot.in_sync

    def test_to_dict(self):
        assert RepositorySnapshot(True, 2).to_dict() == {
            'has_uncommitted_changes': True,
            'change_count': 2,
            'commits_behind_remote': 0,
            'fetch_ok': True,
        }


class TestPassReport:

    def test_any_success_and_failed(self):
        report = PassReport(ran=True)
        report.add(DomainResult("dotfiles", DomainStatus.FAILED, "check_failed"))
        assert not report.any_success

        report.add(DomainResult("agent-config", DomainStatus.CHECKED, "in_sync"))
        assert report.any_success
        assert report.failed == 1

    def test_to_dict(self):
        report = PassReport(ran=True, timestamp_updated=True)
        report.add(DomainResult(
            "dotfiles", DomainStatus.CHECKED, "remote_updates",
            outcome=ResolutionOutcome.IGNORED,
        ))

        data = report.to_dict()

        assert data['type'] == 'pass'
        assert data['domains'] == [{
            'domain': 'dotfiles',
            'status': 'checked',
            'action': 'remote_updates',
            'outcome': 'ignored',
        }]
