"""Project Tools CLI using Click."""

from __future__ import annotations

import logging
import sys
from importlib.metadata import version

import click

from .cli_types import (
    ProjectListArgs,
    ProjectPlaybookArgs,
    ProjectRunArgs,
    ProjectScriptArgs,
    ProjectStatusArgs,
)
from .commands import (
    cmd_project_list,
    cmd_project_playbook,
    cmd_project_reload,
    cmd_project_run,
    cmd_project_script,
    cmd_project_status,
)
from .constants import (
    ANSIBLE_PLAYBOOK_ENV_VAR,
    CONFIG_ENV_VAR,
    DEFAULT_ANSIBLE_PLAYBOOK,
    DEFAULT_DRUSH,
    DRUSH_ENV_VAR,
)
from .exceptions import CommandFailureError, ProjectToolsError, UserError

# Module logger
logger = logging.getLogger("projecttools")


def setup_logging(debug: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if debug else logging.WARNING
    logger.setLevel(level)
    if any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
        for h in logger.handlers
    ):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)


def project_option(func):
    """Decorator to add the --project option to a command."""
    return click.option(
        "--project",
        "-p",
        help="Project name (default: first configured project).",
    )(func)


def timeout_option(func):
    """Decorator to add the --timeout option to a command."""
    return click.option(
        "--timeout",
        type=int,
        default=None,
        help="Per-command timeout in seconds (default: wait until done).",
    )(func)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=version("project-tools"), prog_name="project")
@click.option(
    "--debug",
    "-d",
    is_flag=True,
    help="Enable debug logging to stderr.",
)
@click.option(
    "--config",
    type=click.Path(dir_okay=False),
    help=f"Project configuration file (default: ${CONFIG_ENV_VAR} or "
    "~/.project_tools/projects.json).",
)
@click.option(
    "--drush",
    envvar=DRUSH_ENV_VAR,
    default=DEFAULT_DRUSH,
    show_default=True,
    help=f"Drush executable (env: {DRUSH_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, config: str | None, drush: str):
    """Project Tools: manage Drupal projects and their environments."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config
    ctx.obj["drush"] = drush
    setup_logging(debug=debug)


@cli.command("list")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Emit machine-readable JSON to stdout.",
)
@click.pass_obj
def project_list(obj: dict, json_output: bool):
    """List all projects and environments."""
    cmd_project_list(ProjectListArgs(config=obj["config"], json=json_output))


@cli.command("status")
@click.argument("project", required=False)
@click.argument("environment", required=False)
@click.option(
    "--http",
    is_flag=True,
    help="Also check that each environment's base URL answers.",
)
@timeout_option
@click.pass_obj
def project_status(
    obj: dict,
    project: str | None,
    environment: str | None,
    http: bool,
    timeout: int | None,
):
    """Show site status for all projects / environments.

    PROJECT and ENVIRONMENT optionally narrow the check.
    """
    args = ProjectStatusArgs(
        config=obj["config"],
        drush=obj["drush"],
        project=project,
        environment=environment,
        http=http,
        timeout=timeout,
    )
    cmd_project_status(args)


@cli.command("script")
@click.argument("name")
@click.option(
    "--root",
    type=click.Path(file_okay=False),
    help="Drupal root (default: current directory). Scripts are read from ../scripts.",
)
@timeout_option
def project_script(name: str, root: str | None, timeout: int | None):
    """Run a site script from the drupal root.

    NAME is looked up as NAME, NAME.sh and NAME.py, in that order.
    """
    cmd_project_script(ProjectScriptArgs(name=name, root=root, timeout=timeout))


@cli.command("reload")
def project_reload():
    """Reload target site from source site (not implemented)."""
    cmd_project_reload()


@cli.command("playbook")
@click.argument("environment")
@click.argument("playbook")
@project_option
@click.option(
    "--ansible-playbook",
    envvar=ANSIBLE_PLAYBOOK_ENV_VAR,
    default=DEFAULT_ANSIBLE_PLAYBOOK,
    show_default=True,
    help=f"ansible-playbook executable (env: {ANSIBLE_PLAYBOOK_ENV_VAR}).",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Do not ask for confirmation.",
)
@click.pass_obj
def project_playbook(
    obj: dict,
    environment: str,
    playbook: str,
    project: str | None,
    ansible_playbook: str,
    yes: bool,
):
    """Run ansible PLAYBOOK for a project ENVIRONMENT."""
    args = ProjectPlaybookArgs(
        config=obj["config"],
        project=project,
        environment=environment,
        playbook=playbook,
        ansible_playbook=ansible_playbook,
        yes=yes,
    )
    cmd_project_playbook(args)


@cli.command("run")
@click.argument("environment")
@project_option
@click.option(
    "--command",
    "-c",
    "commands",
    multiple=True,
    help="Drush command line, e.g. -c 'updb' -c 'cim --partial' (repeatable, run in order).",
)
@click.option(
    "--maintenance",
    is_flag=True,
    help="Put the site in maintenance mode while the commands run.",
)
@click.option(
    "--interactive",
    "-i",
    is_flag=True,
    help="Show the commands and ask for confirmation first.",
)
@timeout_option
@click.pass_obj
def project_run(
    obj: dict,
    environment: str,
    project: str | None,
    commands: tuple[str, ...],
    maintenance: bool,
    interactive: bool,
    timeout: int | None,
):
    """Run drush commands in order on a project ENVIRONMENT.

    Stops at the first failing command. With --maintenance, maintenance mode
    is always switched off again at the end.
    """
    args = ProjectRunArgs(
        config=obj["config"],
        drush=obj["drush"],
        project=project,
        environment=environment,
        commands=list(commands),
        maintenance=maintenance,
        interactive=interactive,
        timeout=timeout,
    )
    cmd_project_run(args)


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except CommandFailureError as e:
        # Command already printed its error message, just exit
        sys.exit(e.rc)
    except UserError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(e.rc)
    except ProjectToolsError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(2)
    except KeyboardInterrupt:
        click.echo("ERROR: Interrupted", err=True)
        sys.exit(130)
