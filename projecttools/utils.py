"""Project Tools utility functions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .config import ConfigStore, load_config
from .constants import SCRIPT_EXTENSIONS, SCRIPTS_DIR_NAME
from .exceptions import ScriptNotFound

if TYPE_CHECKING:
    from .cli_types import HasConfig, HasProject

logger = logging.getLogger(__name__)


def load_store(args: HasConfig) -> ConfigStore:
    """Load the project configuration named by args (or the default one)."""
    return load_config(args.config)


def select_project(store: ConfigStore, args: HasProject) -> str:
    """Return the requested project, or the default project when none given."""
    if args.project:
        # Fail early with ProjectNotFound rather than on the environment lookup
        store.get_project(args.project)
        return args.project
    project = store.get_default_project()
    logger.debug("No project given, using default project %s", project)
    return project


def scripts_path(drupal_root: Path) -> Path:
    """Return the scripts directory for a drupal root (a sibling of it)."""
    return drupal_root.parent / SCRIPTS_DIR_NAME


def find_script(name: str, scripts_dir: Path) -> Path:
    """Return the first existing script among name, name.sh and name.py.

    Raises:
        ScriptNotFound: If none of the variants exist
    """
    tried: list[str] = []
    for extension in SCRIPT_EXTENSIONS:
        candidate = scripts_dir / f"{name}{extension}"
        tried.append(str(candidate))
        if candidate.is_file():
            return candidate
    raise ScriptNotFound(name, tried)
