"""Project Tools exception classes."""

from __future__ import annotations


class ProjectToolsError(RuntimeError):
    """Base exception for Project Tools errors."""


class UserError(ProjectToolsError):
    """Errors that should be shown to user without traceback."""

    def __init__(self, message: str, rc: int = 2):
        super().__init__(message)
        self.rc = rc


class ConfigError(UserError):
    """Project configuration file is missing or malformed."""


class ProjectNotFound(UserError):
    """No project with the given name is configured."""

    def __init__(self, project: str):
        super().__init__(f"Project not found: {project}")
        self.project = project


class EnvironmentNotFound(UserError):
    """The project has no environment with the given name."""

    def __init__(self, project: str, environment: str):
        super().__init__(f"Environment {environment} not found for project {project}")
        self.project = project
        self.environment = environment


class PlaybookNotFound(UserError):
    """The resolved environment has no playbook with the given key."""

    def __init__(self, project: str, environment: str, playbook: str):
        super().__init__(
            f"Cannot find ansible playbook {playbook} for project/env {project}/{environment}"
        )
        self.playbook = playbook


class ScriptNotFound(UserError):
    """No script file matched any of the searched names."""

    def __init__(self, name: str, searched: list[str] | None = None):
        message = f"Script {name} not found."
        if searched:
            message += " Tried: " + ", ".join(searched)
        super().__init__(message)
        self.name = name


class SiteAliasUnresolved(UserError):
    """Drush could not resolve the site alias to a target."""

    def __init__(self, alias: str, detail: str = ""):
        message = f"Site alias not found: {alias}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.alias = alias


class NotImplementedCommand(UserError):
    """Command exists on the CLI but has no implementation yet."""

    def __init__(self, message: str = "Command not implemented"):
        super().__init__(message)


class CommandFailed(ProjectToolsError):
    """A remote command in a sequence returned a failed result."""

    def __init__(self, name: str):
        super().__init__(f"Error running drush command: {name}")
        self.name = name


class Cancelled(ProjectToolsError):
    """The operator declined a confirmation prompt."""

    def __init__(self, message: str = "Cancelled!!!"):
        super().__init__(message)


class CommandFailureError(ProjectToolsError):
    """Command failed - error message already printed, just need to exit.

    This exception is for cases where a command has already printed
    its error message and just needs to signal failure without
    additional output from main().
    """

    def __init__(self, rc: int = 1):
        super().__init__("")
        self.rc = rc
