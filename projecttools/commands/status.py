"""Project Tools status command."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from ..aliases import SiteAliasManager
from ..constants import STATUS_COMMAND
from ..exceptions import CommandFailureError, SiteAliasUnresolved
from ..process import CommandRunner, command_succeeded
from ..resolver import Resolver
from ..urlcheck import probe_url
from ..utils import load_store

if TYPE_CHECKING:
    from ..cli_types import ProjectStatusArgs

logger = logging.getLogger(__name__)


def cmd_project_status(args: ProjectStatusArgs) -> None:
    """Run core-status on every matching project environment.

    An alias drush cannot resolve is a warning, not an error; the remaining
    environments are still checked.
    """
    store = load_store(args)
    resolver = Resolver(store)
    aliases = SiteAliasManager(args.drush)
    runner = CommandRunner(args.drush, timeout_s=args.timeout)

    checked = failed = skipped = 0
    for project_name, env_name in resolver.iter_environments(args.project, args.environment):
        environment = resolver.resolve_environment(project_name, env_name)
        try:
            site = aliases.get(environment.site_alias)
        except SiteAliasUnresolved:
            logger.warning(
                "Site alias not found for %s/%s: %s",
                project_name,
                env_name,
                environment.site_alias,
            )
            skipped += 1
            continue

        click.echo(
            click.style(
                f"Checking site status for {project_name}/{env_name}: {site.alias}",
                fg="cyan",
            )
        )
        checked += 1
        ok = command_succeeded(runner.run_remote(site, STATUS_COMMAND))

        if args.http and environment.base_url:
            url_ok, detail = probe_url(environment.base_url)
            status = click.style("OK", fg="green") if url_ok else click.style("FAIL", fg="red")
            click.echo(f"URL {status} {environment.base_url} {detail}")
            ok = ok and url_ok

        if not ok:
            failed += 1
            click.echo(click.style(f"FAIL {project_name}/{env_name}", fg="red"), err=True)

    click.echo(f"\nSummary: checked={checked} failed={failed} skipped={skipped}")
    if failed:
        raise CommandFailureError
