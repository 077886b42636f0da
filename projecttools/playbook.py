"""Ansible playbook runs against resolved environments."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Callable

import click

from .constants import DEFAULT_ANSIBLE_PLAYBOOK
from .exceptions import Cancelled, ConfigError, PlaybookNotFound
from .process import CommandRunner
from .resolver import Resolver
from .settings import ResolvedEnvironment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybookRun:
    """Everything needed to invoke ansible-playbook for one environment."""

    playbook_key: str
    playbook_path: str
    inventory_path: str
    target: str
    extra_vars: dict[str, str]


def plan_playbook(environment: ResolvedEnvironment, playbook_key: str) -> PlaybookRun:
    """Compute playbook/inventory paths and extra vars for an environment."""
    playbook = environment.ansible_playbooks.get(playbook_key)
    if not playbook:
        raise PlaybookNotFound(
            environment.project_name, environment.environment_name, playbook_key
        )

    where = f"{environment.project_name}/{environment.environment_name}"
    if not environment.ansible_directory:
        raise ConfigError(f"No ansible_directory configured for {where}")
    if not environment.ansible_inventory:
        raise ConfigError(f"No ansible_inventory configured for {where}")

    return PlaybookRun(
        playbook_key=playbook_key,
        playbook_path=os.path.join(environment.ansible_directory, playbook),
        inventory_path=os.path.join(environment.ansible_directory, environment.ansible_inventory),
        target=environment.site_alias,
        extra_vars={
            "project_name": environment.project_name,
            "environment_name": environment.environment_name,
            "site_alias": environment.site_alias,
            "drupal_root": environment.drupal_root or "",
        },
    )


def build_playbook_command(
    run: PlaybookRun, ansible_playbook: str = DEFAULT_ANSIBLE_PLAYBOOK
) -> list[str]:
    """Return the ansible-playbook argv for a planned run."""
    return [
        ansible_playbook,
        "-i",
        run.inventory_path,
        run.playbook_path,
        "-v",
        "--extra-vars",
        json.dumps(run.extra_vars, sort_keys=True),
    ]


class PlaybookLauncher:
    """Confirm and launch ansible playbooks for project environments."""

    def __init__(
        self,
        resolver: Resolver,
        runner: CommandRunner,
        *,
        ansible_playbook: str = DEFAULT_ANSIBLE_PLAYBOOK,
        confirm: Callable[[str], bool] | None = None,
    ):
        self.resolver = resolver
        self.runner = runner
        self.ansible_playbook = ansible_playbook
        self.confirm = confirm or (lambda prompt: click.confirm(prompt, default=False))

    def _confirm(self, prompt: str) -> None:
        if not self.confirm(prompt):
            raise Cancelled()

    def launch(
        self, project_name: str, env_name: str, playbook_key: str, *, assume_yes: bool = False
    ) -> bool:
        """Run a configured playbook against an environment.

        Returns False without running anything when the operator declines,
        otherwise whether ansible-playbook exited successfully.
        """
        environment = self.resolver.resolve_environment(project_name, env_name)
        run = plan_playbook(environment, playbook_key)

        click.echo(f"Run {playbook_key} for site {run.target}")
        click.echo(f"  {click.style('Ansible playbook:', fg='cyan')} {run.playbook_path}")
        click.echo(f"  {click.style('Ansible inventory:', fg='cyan')} {run.inventory_path}")

        try:
            if not assume_yes:
                self._confirm("Continue?")
        except Cancelled as e:
            click.echo(click.style(str(e), fg="yellow"), err=True)
            return False

        cmd = build_playbook_command(run, self.ansible_playbook)
        rc = self.runner.run_interactive(cmd)
        if rc != 0:
            logger.warning("ansible-playbook exited with rc=%d", rc)
        return rc == 0
