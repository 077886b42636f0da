"""Project Tools list command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from ..utils import load_store

if TYPE_CHECKING:
    from ..cli_types import ProjectListArgs
    from ..config import ConfigStore


def project_listing(store: ConfigStore) -> list[dict[str, Any]]:
    """Return projects and their environments as plain data."""
    listing = []
    for project_name, project in store.get_projects().items():
        listing.append(
            {
                "project": project_name,
                "project_label": project.project_label,
                "environments": [
                    {
                        "environment": env_name,
                        "site_alias": env.site_alias,
                        "base_url": env.base_url,
                    }
                    for env_name, env in store.get_environments(project_name).items()
                ],
            }
        )
    return listing


def format_listing(listing: list[dict[str, Any]]) -> list[str]:
    """Format a project listing as text lines."""
    lines = []
    for project in listing:
        lines.append(f"{project['project']} {project['project_label']}".rstrip())
        for env in project["environments"]:
            line = f"- {env['environment']} {env['site_alias']} {env['base_url'] or ''}"
            lines.append(line.rstrip())
    return lines


def cmd_project_list(args: ProjectListArgs) -> None:
    """List all projects and their environments."""
    store = load_store(args)
    listing = project_listing(store)
    if args.json:
        print(json.dumps(listing, indent=2))
        return
    for line in format_listing(listing):
        click.echo(line)
