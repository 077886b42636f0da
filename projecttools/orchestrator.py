"""Ordered drush command sequences with maintenance-mode bracketing."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import click

from .constants import MAINTENANCE_MODE_KEY
from .exceptions import Cancelled, CommandFailed, ProjectToolsError, UserError
from .process import CommandRunner, command_succeeded

if TYPE_CHECKING:
    from .aliases import SiteTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandSpec:
    """One drush command: name, positional arguments and options."""

    name: str
    arguments: tuple[str, ...] = ()
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def parse(cls, command_line: str) -> CommandSpec:
        """Parse a shell-quoted command line like 'cim --partial --source=../config'.

        Tokens starting with '--' become options (value True when no '=');
        everything else after the command name is an argument.
        """
        try:
            tokens = shlex.split(command_line)
        except ValueError as e:
            raise UserError(f"Cannot parse command '{command_line}': {e}") from e
        if not tokens:
            raise UserError("Empty command")
        if tokens[0].startswith("-"):
            raise UserError(f"Command must start with a command name: {command_line}")

        arguments: list[str] = []
        options: dict[str, Any] = {}
        for token in tokens[1:]:
            if token.startswith("--") and len(token) > 2:
                key, sep, value = token[2:].partition("=")
                options[key] = value if sep else True
            else:
                arguments.append(token)
        return cls(tokens[0], tuple(arguments), MappingProxyType(options))


@dataclass(frozen=True)
class RunOptions:
    """Flags for a command sequence run."""

    maintenance_mode: bool = False
    interactive: bool = False


class Orchestrator:
    """Run command sequences against one site target."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def set_maintenance_mode(self, site_target: SiteTarget, enabled: bool) -> bool:
        result = self.runner.run_remote(
            site_target,
            "state:set",
            [MAINTENANCE_MODE_KEY, "1" if enabled else "0"],
            {"input-format": "integer"},
        )
        return command_succeeded(result)

    @contextmanager
    def maintenance_mode(self, site_target: SiteTarget, enabled: bool = True) -> Iterator[None]:
        """Hold the site in maintenance mode for the duration of the block.

        Turning it on is best effort. Turning it off is always attempted on
        exit, including when the block raises.
        """
        if not enabled:
            yield
            return

        if not self.set_maintenance_mode(site_target, True):
            logger.warning("Could not enable maintenance mode on %s", site_target.alias)
        try:
            yield
        except BaseException:
            self._release_maintenance_mode(site_target, block_failed=True)
            raise
        self._release_maintenance_mode(site_target, block_failed=False)

    def _release_maintenance_mode(self, site_target: SiteTarget, block_failed: bool) -> None:
        # An error switching it off must not replace the one that ended the block
        try:
            released = self.set_maintenance_mode(site_target, False)
        except ProjectToolsError:
            if not block_failed:
                raise
            logger.exception("Could not disable maintenance mode on %s", site_target.alias)
            return
        if not released:
            logger.error("Could not disable maintenance mode on %s", site_target.alias)

    def run_commands(self, site_target: SiteTarget, commands: Sequence[CommandSpec]) -> None:
        """Run commands in order, raising CommandFailed at the first failure."""
        for command in commands:
            result = self.runner.run_remote(
                site_target, command.name, command.arguments, command.options
            )
            if not command_succeeded(result):
                raise CommandFailed(command.name)

    def _confirm_sequence(
        self, site_target: SiteTarget, commands: Sequence[CommandSpec], options: RunOptions
    ) -> None:
        click.echo(f"Run {len(commands)} command(s) on {site_target.label}:")
        for command in commands:
            click.echo("  " + shlex.join([command.name, *command.arguments]))
        if options.maintenance_mode:
            click.echo("  (site will be put in maintenance mode)")
        if not click.confirm("Continue?", default=False):
            raise Cancelled()

    def run_sequence(
        self,
        site_target: SiteTarget,
        commands: Sequence[CommandSpec],
        options: RunOptions | None = None,
    ) -> bool:
        """Run commands in order and return True only if all of them succeed.

        The first failing command stops the sequence. With maintenance_mode
        the site is put in maintenance before the first command and taken out
        of it after the last one, or after the failure.
        """
        options = options or RunOptions()
        if not commands:
            logger.error("No commands given for %s", site_target.alias)
            return False

        try:
            if options.interactive:
                self._confirm_sequence(site_target, commands, options)
            with self.maintenance_mode(site_target, options.maintenance_mode):
                self.run_commands(site_target, commands)
        except CommandFailed as e:
            click.echo(click.style(f"ERROR: {e}", fg="red"), err=True)
            return False
        except Cancelled as e:
            click.echo(str(e), err=True)
            return False
        return True
