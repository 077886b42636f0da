"""Tests for projecttools/commands/run.py - drush command sequences."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import alias_json, completed
from projecttools.cli_types import ProjectRunArgs
from projecttools.commands.run import cmd_project_run
from projecttools.exceptions import CommandFailureError, SiteAliasUnresolved, UserError


def args_for(config_file: Path, *commands: str, **kwargs) -> ProjectRunArgs:
    return ProjectRunArgs(
        config=str(config_file),
        drush="drush",
        environment=kwargs.pop("environment", "prod"),
        commands=list(commands),
        **kwargs,
    )


class TestCmdProjectRun:
    """Tests for cmd_project_run."""

    def test_runs_commands_on_resolved_alias(self, config_file: Path, mocker):
        mock_run = mocker.patch("projecttools.process.subprocess.run")
        mock_run.side_effect = [completed(0, alias_json("@acme.prod")), completed(0), completed(0)]

        cmd_project_run(args_for(config_file, "updb", "cim --partial"))

        cmds = [c[0][0] for c in mock_run.call_args_list]
        assert cmds[0] == ["drush", "site:alias", "@acme.prod", "--format=json"]
        assert cmds[1] == ["drush", "@acme.prod", "updb", "--yes"]
        assert cmds[2] == ["drush", "@acme.prod", "cim", "--partial", "--yes"]

    def test_default_project(self, config_file: Path, mocker):
        mock_run = mocker.patch("projecttools.process.subprocess.run")
        mock_run.side_effect = [completed(0, alias_json("@acme.staging")), completed(0)]

        cmd_project_run(args_for(config_file, "cr", environment="staging"))

        assert mock_run.call_args[0][0][1] == "@acme.staging"

    def test_failure_with_maintenance(self, config_file: Path, mocker):
        mock_run = mocker.patch("projecttools.process.subprocess.run")
        mock_run.side_effect = [
            completed(0, alias_json("@blog.live")),
            completed(0),  # maintenance on
            completed(1, b"", b"update failed"),  # updb
            completed(0),  # maintenance off
        ]

        with pytest.raises(CommandFailureError):
            cmd_project_run(
                args_for(
                    config_file, "updb", "cr", project="blog", environment="live", maintenance=True
                )
            )

        cmds = [c[0][0] for c in mock_run.call_args_list]
        assert [c[2] for c in cmds[1:]] == ["state:set", "updb", "state:set"]
        assert cmds[-1][3:5] == ["system.maintenance_mode", "0"]

    def test_unresolved_alias(self, config_file: Path, mocker):
        mock_run = mocker.patch("projecttools.process.subprocess.run")
        mock_run.return_value = completed(1, b"", b"not found")

        with pytest.raises(SiteAliasUnresolved):
            cmd_project_run(args_for(config_file, "cr"))

        assert mock_run.call_count == 1

    def test_requires_commands(self, config_file: Path):
        with pytest.raises(UserError, match="at least one command"):
            cmd_project_run(args_for(config_file))
