"""Typed project and environment settings records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .exceptions import ConfigError

_EMPTY: Mapping[str, Any] = MappingProxyType({})

PROJECT_FIELDS = ("project_label", "ansible_directory", "ansible_inventory")
ENVIRONMENT_FIELDS = (
    "site_alias",
    "base_url",
    "drupal_root",
    "ansible_playbooks",
    "ansible_directory",
    "ansible_inventory",
)


def _frozen(data: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(data)) if data else _EMPTY


def _optional_str(data: Mapping[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{where}: '{key}' must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class ProjectSettings:
    """Project-level settings, shared by all of its environments."""

    name: str
    project_label: str = ""
    ansible_directory: str | None = None
    ansible_inventory: str | None = None
    defaults: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, Any]) -> ProjectSettings:
        where = f"project {name}"
        if not isinstance(data, Mapping):
            raise ConfigError(f"{where}: settings must be an object")
        return cls(
            name=name,
            project_label=_optional_str(data, "project_label", where) or "",
            ansible_directory=_optional_str(data, "ansible_directory", where),
            ansible_inventory=_optional_str(data, "ansible_inventory", where),
            defaults=_frozen({k: v for k, v in data.items() if k not in PROJECT_FIELDS}),
        )


@dataclass(frozen=True)
class EnvironmentSettings:
    """Settings for one deployment target of a project."""

    name: str
    site_alias: str
    base_url: str | None = None
    drupal_root: str | None = None
    ansible_playbooks: Mapping[str, str] | None = None
    ansible_directory: str | None = None
    ansible_inventory: str | None = None
    extra: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    @classmethod
    def from_mapping(
        cls, project: str, name: str, data: Mapping[str, Any]
    ) -> EnvironmentSettings:
        where = f"environment {project}/{name}"
        if not isinstance(data, Mapping):
            raise ConfigError(f"{where}: settings must be an object")
        site_alias = _optional_str(data, "site_alias", where)
        if not site_alias:
            raise ConfigError(f"{where}: missing required 'site_alias'")
        playbooks = data.get("ansible_playbooks")
        if playbooks is not None and not isinstance(playbooks, Mapping):
            raise ConfigError(f"{where}: 'ansible_playbooks' must be an object")
        return cls(
            name=name,
            site_alias=site_alias,
            base_url=_optional_str(data, "base_url", where),
            drupal_root=_optional_str(data, "drupal_root", where),
            ansible_playbooks=None if playbooks is None else MappingProxyType(dict(playbooks)),
            ansible_directory=_optional_str(data, "ansible_directory", where),
            ansible_inventory=_optional_str(data, "ansible_inventory", where),
            extra=_frozen({k: v for k, v in data.items() if k not in ENVIRONMENT_FIELDS}),
        )


@dataclass(frozen=True)
class ResolvedEnvironment:
    """An environment merged over its project settings."""

    project_name: str
    environment_name: str
    project_label: str
    site_alias: str
    base_url: str | None
    drupal_root: str | None
    ansible_directory: str | None
    ansible_inventory: str | None
    ansible_playbooks: Mapping[str, str]
    extra: Mapping[str, Any]

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a typed field or an extra key by name."""
        if key in self.__dataclass_fields__:
            return getattr(self, key)
        return self.extra.get(key, default)


def merge_with_override(
    environment: EnvironmentSettings, project: ProjectSettings
) -> ResolvedEnvironment:
    """Merge environment settings over project settings.

    Environment values win whenever the key is present, even when empty.
    Absent environment fields fall back to the project's typed field of the
    same name, then to the same key in the project's free-form defaults.
    A playbook map is taken as a whole from one side, never combined.
    """

    def pick(key: str, project_value: Any = None) -> Any:
        value = getattr(environment, key)
        if value is not None:
            return value
        if project_value is not None:
            return project_value
        return project.defaults.get(key)

    playbooks = environment.ansible_playbooks
    if playbooks is None:
        playbooks = project.defaults.get("ansible_playbooks") or {}

    return ResolvedEnvironment(
        project_name=project.name,
        environment_name=environment.name,
        project_label=project.project_label,
        site_alias=environment.site_alias,
        base_url=pick("base_url"),
        drupal_root=pick("drupal_root"),
        ansible_directory=pick("ansible_directory", project.ansible_directory),
        ansible_inventory=pick("ansible_inventory", project.ansible_inventory),
        ansible_playbooks=_frozen(playbooks),
        extra=_frozen(
            {
                **{k: v for k, v in project.defaults.items() if k not in ENVIRONMENT_FIELDS},
                **environment.extra,
            }
        ),
    )
