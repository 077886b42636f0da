"""Project/environment name resolution."""

from __future__ import annotations

from collections.abc import Iterator

from .config import ConfigStore
from .exceptions import EnvironmentNotFound
from .settings import ResolvedEnvironment, merge_with_override


class Resolver:
    """Turn project and environment names into resolved environment records."""

    def __init__(self, store: ConfigStore):
        self.store = store

    def resolve_environment(self, project_name: str, env_name: str) -> ResolvedEnvironment:
        """Return the environment merged over its project settings.

        Raises ProjectNotFound or EnvironmentNotFound; never returns a partial
        record. Nothing is cached.
        """
        environment = self.store.get_environment(project_name, env_name)
        project = self.store.get_project(project_name)
        return merge_with_override(environment, project)

    def iter_environments(
        self, project_filter: str | None = None, env_filter: str | None = None
    ) -> Iterator[tuple[str, str]]:
        """Yield (project, environment) names matching the optional filters."""
        if project_filter is not None:
            projects = {project_filter: self.store.get_environments(project_filter)}
        else:
            projects = dict(self.store.get_environments())

        matched = False
        for project_name, envs in projects.items():
            for env_name in envs:
                if env_filter is not None and env_name != env_filter:
                    continue
                matched = True
                yield project_name, env_name

        if env_filter is not None and not matched:
            raise EnvironmentNotFound(project_filter or "*", env_filter)
