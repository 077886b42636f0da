"""Tests for projecttools/playbook.py - ansible playbook launching."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
from projecttools.config import ConfigStore
from projecttools.exceptions import (
    Cancelled,
    ConfigError,
    EnvironmentNotFound,
    PlaybookNotFound,
)
from projecttools.playbook import PlaybookLauncher, build_playbook_command, plan_playbook
from projecttools.resolver import Resolver


@pytest.fixture
def resolver(store: ConfigStore) -> Resolver:
    return Resolver(store)


@pytest.fixture
def runner() -> MagicMock:
    runner = MagicMock()
    runner.run_interactive.return_value = 0
    return runner


class TestPlanPlaybook:
    """Tests for plan_playbook and build_playbook_command."""

    def test_paths_and_extra_vars(self, resolver: Resolver):
        run = plan_playbook(resolver.resolve_environment("acme", "staging"), "deploy")

        assert run.playbook_path == "/srv/ansible/acme/playbooks/deploy.yml"
        assert run.inventory_path == "/srv/ansible/acme/hosts.ini"
        assert run.target == "@acme.staging"
        assert run.extra_vars == {
            "project_name": "acme",
            "environment_name": "staging",
            "site_alias": "@acme.staging",
            "drupal_root": "/var/www/acme/web",
        }

    def test_environment_ansible_directory_wins(self, resolver: Resolver):
        run = plan_playbook(resolver.resolve_environment("acme", "prod"), "backup")
        assert run.playbook_path == "/srv/ansible/acme-prod/playbooks/backup.yml"
        assert run.inventory_path == "/srv/ansible/acme-prod/hosts.ini"

    def test_unknown_playbook(self, resolver: Resolver):
        with pytest.raises(PlaybookNotFound, match="backup for project/env acme/staging"):
            plan_playbook(resolver.resolve_environment("acme", "staging"), "backup")

    def test_missing_ansible_directory(self):
        store = ConfigStore.from_dict(
            {
                "projects": {"x": {"ansible_inventory": "hosts"}},
                "environments": {
                    "x": {"dev": {"site_alias": "@x.dev", "ansible_playbooks": {"p": "p.yml"}}}
                },
            }
        )
        with pytest.raises(ConfigError, match="ansible_directory"):
            plan_playbook(Resolver(store).resolve_environment("x", "dev"), "p")

    def test_command(self, resolver: Resolver):
        run = plan_playbook(resolver.resolve_environment("acme", "staging"), "deploy")

        cmd = build_playbook_command(run, "/usr/bin/ansible-playbook")

        assert cmd[:5] == [
            "/usr/bin/ansible-playbook",
            "-i",
            "/srv/ansible/acme/hosts.ini",
            "/srv/ansible/acme/playbooks/deploy.yml",
            "-v",
        ]
        assert cmd[5] == "--extra-vars"
        assert json.loads(cmd[6]) == run.extra_vars


class TestPlaybookLauncher:
    """Tests for PlaybookLauncher.launch."""

    def test_declined_runs_nothing(self, resolver: Resolver, runner: MagicMock, capsys):
        launcher = PlaybookLauncher(resolver, runner, confirm=lambda prompt: False)

        assert launcher.launch("acme", "staging", "deploy") is False

        runner.run_interactive.assert_not_called()
        out = capsys.readouterr()
        assert "Run deploy for site @acme.staging" in out.out
        assert "Cancelled" in out.err

    def test_declined_prompt_raises_cancelled(self, resolver: Resolver, runner: MagicMock):
        launcher = PlaybookLauncher(resolver, runner, confirm=lambda prompt: False)
        with pytest.raises(Cancelled, match="Cancelled!!!"):
            launcher._confirm("Continue?")

    def test_confirmed_runs_ansible(self, resolver: Resolver, runner: MagicMock):
        prompts: list[str] = []
        launcher = PlaybookLauncher(
            resolver,
            runner,
            ansible_playbook="ap",
            confirm=lambda prompt: prompts.append(prompt) or True,
        )

        assert launcher.launch("acme", "staging", "deploy") is True

        assert prompts == ["Continue?"]
        cmd = runner.run_interactive.call_args[0][0]
        assert cmd[0] == "ap"
        assert "/srv/ansible/acme/playbooks/deploy.yml" in cmd

    def test_assume_yes_skips_prompt(self, resolver: Resolver, runner: MagicMock):
        confirm = MagicMock(return_value=False)
        launcher = PlaybookLauncher(resolver, runner, confirm=confirm)

        assert launcher.launch("acme", "prod", "backup", assume_yes=True) is True

        confirm.assert_not_called()
        runner.run_interactive.assert_called_once()

    def test_ansible_failure(self, resolver: Resolver, runner: MagicMock):
        runner.run_interactive.return_value = 2
        launcher = PlaybookLauncher(resolver, runner, confirm=lambda prompt: True)

        assert launcher.launch("acme", "staging", "deploy") is False

    def test_unknown_playbook_does_not_prompt(self, resolver: Resolver, runner: MagicMock):
        confirm = MagicMock(return_value=True)
        launcher = PlaybookLauncher(resolver, runner, confirm=confirm)

        with pytest.raises(PlaybookNotFound):
            launcher.launch("acme", "staging", "nope")

        confirm.assert_not_called()
        runner.run_interactive.assert_not_called()

    def test_unknown_environment(self, resolver: Resolver, runner: MagicMock):
        launcher = PlaybookLauncher(resolver, runner, confirm=lambda prompt: True)
        with pytest.raises(EnvironmentNotFound):
            launcher.launch("acme", "qa", "deploy")

    def test_project_playbook_not_inherited_when_environment_has_own(self, runner: MagicMock):
        store = ConfigStore.from_dict(
            {
                "projects": {
                    "x": {
                        "ansible_directory": "/srv/x",
                        "ansible_inventory": "hosts",
                        "ansible_playbooks": {"provision": "prov.yml"},
                    }
                },
                "environments": {
                    "x": {"dev": {"site_alias": "@x.dev", "ansible_playbooks": {"deploy": "d.yml"}}}
                },
            }
        )
        launcher = PlaybookLauncher(Resolver(store), runner, confirm=lambda prompt: True)

        with pytest.raises(PlaybookNotFound):
            launcher.launch("x", "dev", "provision")

        runner.run_interactive.assert_not_called()
