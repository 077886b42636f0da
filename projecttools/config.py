"""Project configuration loading and lookup."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .constants import CONFIG_DIR_NAME, CONFIG_ENV_VAR, CONFIG_FILE_NAME
from .exceptions import ConfigError, EnvironmentNotFound, ProjectNotFound
from .settings import EnvironmentSettings, ProjectSettings

logger = logging.getLogger(__name__)


class ConfigStore:
    """Read-only view of the configured projects and their environments.

    Built once at startup and handed to whatever needs it; nothing mutates
    it afterwards.
    """

    def __init__(
        self,
        projects: Mapping[str, ProjectSettings],
        environments: Mapping[str, Mapping[str, EnvironmentSettings]],
    ):
        self._projects = MappingProxyType(dict(projects))
        self._environments = MappingProxyType(
            {name: MappingProxyType(dict(envs)) for name, envs in environments.items()}
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConfigStore:
        """Build a store from the decoded configuration document."""
        if not isinstance(data, Mapping):
            raise ConfigError("Configuration must be a JSON object")

        raw_projects = data.get("projects") or {}
        raw_environments = data.get("environments") or {}
        if not isinstance(raw_projects, Mapping):
            raise ConfigError("'projects' must be an object mapping project names to settings")
        if not isinstance(raw_environments, Mapping):
            raise ConfigError(
                "'environments' must be an object mapping project names to environments"
            )

        projects = {
            name: ProjectSettings.from_mapping(name, settings)
            for name, settings in raw_projects.items()
        }

        environments: dict[str, dict[str, EnvironmentSettings]] = {}
        for project_name, envs in raw_environments.items():
            if project_name not in projects:
                raise ConfigError(f"Environments defined for unknown project: {project_name}")
            if not isinstance(envs, Mapping):
                raise ConfigError(f"Environments for project {project_name} must be an object")
            environments[project_name] = {
                env_name: EnvironmentSettings.from_mapping(project_name, env_name, env)
                for env_name, env in envs.items()
            }
        for project_name in projects:
            environments.setdefault(project_name, {})

        return cls(projects, environments)

    def get_projects(self) -> Mapping[str, ProjectSettings]:
        return self._projects

    def get_project(self, name: str) -> ProjectSettings:
        try:
            return self._projects[name]
        except KeyError:
            raise ProjectNotFound(name) from None

    def get_environments(self, project: str | None = None) -> Mapping[str, Any]:
        """Return every project's environments, or one project's when named."""
        if project is None:
            return self._environments
        try:
            return self._environments[project]
        except KeyError:
            raise ProjectNotFound(project) from None

    def get_environment(self, project: str, environment: str) -> EnvironmentSettings:
        envs = self.get_environments(project)
        try:
            return envs[environment]
        except KeyError:
            raise EnvironmentNotFound(project, environment) from None

    def get_default_project(self) -> str:
        """Return the first configured project name.

        Handy when a single project is configured; with several it is just
        whichever comes first in the configuration file.
        """
        for name in self._projects:
            return name
        raise ConfigError("No projects configured")


def default_config_path() -> Path:
    """Return the configuration path from the environment or the home default."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_config(path: Path | str | None = None) -> ConfigStore:
    """Load project configuration from a JSON file.

    Looks for the file in this order:
    1. The explicit path argument
    2. File path from PROJECT_TOOLS_CONFIG environment variable
    3. ~/.project_tools/projects.json

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    config_path = Path(path).expanduser() if path else default_config_path()
    logger.debug("Loading project configuration from %s", config_path)

    if not config_path.exists():
        raise ConfigError(
            f"Project configuration not found at {config_path}. "
            f"Create it or set {CONFIG_ENV_VAR} environment variable to the file path."
        )

    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {config_path}: {e}") from e

    return ConfigStore.from_dict(data)
