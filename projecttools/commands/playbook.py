"""Project Tools playbook command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import CommandFailureError
from ..playbook import PlaybookLauncher
from ..process import CommandRunner
from ..resolver import Resolver
from ..utils import load_store, select_project

if TYPE_CHECKING:
    from ..cli_types import ProjectPlaybookArgs


def cmd_project_playbook(args: ProjectPlaybookArgs) -> None:
    """Run a configured ansible playbook for a project environment."""
    store = load_store(args)
    project = select_project(store, args)
    launcher = PlaybookLauncher(
        Resolver(store),
        CommandRunner(),
        ansible_playbook=args.ansible_playbook,
    )
    if not launcher.launch(project, args.environment, args.playbook, assume_yes=args.yes):
        raise CommandFailureError
