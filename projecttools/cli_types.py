"""Type definitions for CLI command arguments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .constants import DEFAULT_ANSIBLE_PLAYBOOK


@dataclass
class ProjectListArgs:
    """Arguments for list command."""

    config: str | None
    json: bool = False


@dataclass
class ProjectStatusArgs:
    """Arguments for status command."""

    config: str | None
    drush: str
    project: str | None = None
    environment: str | None = None
    http: bool = False
    timeout: int | None = None


@dataclass
class ProjectScriptArgs:
    """Arguments for script command."""

    name: str
    root: str | None = None
    timeout: int | None = None


@dataclass
class ProjectPlaybookArgs:
    """Arguments for playbook command."""

    config: str | None
    environment: str
    playbook: str
    project: str | None = None
    ansible_playbook: str = DEFAULT_ANSIBLE_PLAYBOOK
    yes: bool = False


@dataclass
class ProjectRunArgs:
    """Arguments for run command."""

    config: str | None
    drush: str
    environment: str
    commands: list[str] = field(default_factory=list)
    project: str | None = None
    maintenance: bool = False
    interactive: bool = False
    timeout: int | None = None


class HasConfig(Protocol):
    """Protocol for args that locate the project configuration."""

    config: str | None


class HasProject(Protocol):
    """Protocol for args that select a project, falling back to the default."""

    config: str | None
    project: str | None
