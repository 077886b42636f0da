"""
Project Tools - manage Drupal projects and their environments from one place.

Design goals:
- Configuration is a static JSON file, loaded once and never written.
- Remote work goes through drush site aliases; provisioning through ansible.
- Every remote step is explicit and printed before it runs.
"""

from __future__ import annotations

from .cli import main
from .config import ConfigStore, load_config
from .exceptions import ProjectToolsError, UserError
from .resolver import Resolver

__all__ = [
    "ConfigStore",
    "ProjectToolsError",
    "Resolver",
    "UserError",
    "load_config",
    "main",
]
