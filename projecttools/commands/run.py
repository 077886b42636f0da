"""Project Tools run command."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ..aliases import SiteAliasManager
from ..exceptions import CommandFailureError, UserError
from ..orchestrator import CommandSpec, Orchestrator, RunOptions
from ..process import CommandRunner
from ..resolver import Resolver
from ..utils import load_store, select_project

if TYPE_CHECKING:
    from ..cli_types import ProjectRunArgs


def cmd_project_run(args: ProjectRunArgs) -> None:
    """Run a sequence of drush commands on a project environment."""
    if not args.commands:
        raise UserError("Give at least one command with -c/--command.")
    commands = [CommandSpec.parse(line) for line in args.commands]

    store = load_store(args)
    project = select_project(store, args)
    environment = Resolver(store).resolve_environment(project, args.environment)
    site = SiteAliasManager(args.drush).get(environment.site_alias)

    orchestrator = Orchestrator(CommandRunner(args.drush, timeout_s=args.timeout))
    ok = orchestrator.run_sequence(
        site,
        commands,
        RunOptions(maintenance_mode=args.maintenance, interactive=args.interactive),
    )
    if not ok:
        raise CommandFailureError
    click.echo(
        click.style(f"OK {project}/{args.environment}: {len(commands)} command(s)", fg="green")
    )
