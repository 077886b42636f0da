"""Site alias resolution through drush."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .constants import ALIAS_COMMAND, DEFAULT_DRUSH
from .exceptions import SiteAliasUnresolved
from .process import run_process

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SiteTarget:
    """A reachable site, as drush describes the alias."""

    alias: str
    root: str | None = None
    uri: str | None = None
    host: str | None = None
    user: str | None = None

    @property
    def label(self) -> str:
        if self.host:
            prefix = f"{self.user}@{self.host}" if self.user else self.host
            return f"{self.alias} ({prefix}:{self.root or '?'})"
        return self.alias


def normalize_alias(alias: str) -> str:
    """Return alias with the leading '@' drush expects."""
    alias = alias.strip()
    return alias if alias.startswith("@") else f"@{alias}"


def parse_alias_record(alias: str, data: Any) -> SiteTarget:
    """Build a SiteTarget from `drush site:alias --format=json` output.

    Drush keys the record by alias name; a bare record is accepted too.
    """
    if isinstance(data, Mapping) and len(data) == 1:
        (only_value,) = data.values()
        if isinstance(only_value, Mapping):
            data = only_value
    if not isinstance(data, Mapping) or not data:
        raise SiteAliasUnresolved(alias, "empty alias record")
    return SiteTarget(
        alias=alias,
        root=data.get("root"),
        uri=data.get("uri"),
        host=data.get("host"),
        user=data.get("user"),
    )


class SiteAliasManager:
    """Resolve site aliases to targets by asking drush."""

    def __init__(self, drush: str = DEFAULT_DRUSH, *, timeout_s: int | None = 30):
        self.drush = drush
        self.timeout_s = timeout_s

    def get(self, alias: str) -> SiteTarget:
        """Return the target for alias, or raise SiteAliasUnresolved."""
        name = normalize_alias(alias)
        rc, out, err = run_process(
            [self.drush, ALIAS_COMMAND, name, "--format=json"],
            timeout_s=self.timeout_s,
        )
        if rc != 0 or not out.strip():
            logger.debug("Alias lookup for %s failed (rc=%d): %s", name, rc, err.strip())
            raise SiteAliasUnresolved(name)
        try:
            data = json.loads(out)
        except json.JSONDecodeError as e:
            raise SiteAliasUnresolved(name, f"unparseable drush output: {e}") from e
        return parse_alias_record(name, data)
