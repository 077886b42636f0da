"""Project Tools command implementations."""

from __future__ import annotations

from .playbook import cmd_project_playbook
from .project_list import cmd_project_list
from .reload import cmd_project_reload
from .run import cmd_project_run
from .script import cmd_project_script
from .status import cmd_project_status

__all__ = [
    "cmd_project_list",
    "cmd_project_playbook",
    "cmd_project_reload",
    "cmd_project_run",
    "cmd_project_script",
    "cmd_project_status",
]
