"""Shared pytest fixtures for Project Tools tests."""

from __future__ import annotations

import json
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from projecttools.config import ConfigStore


@pytest.fixture
def tmp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def sample_config() -> dict[str, Any]:
    """Configuration with one two-environment project and one single-environment project."""
    return {
        "projects": {
            "acme": {
                "project_label": "Acme Corp",
                "ansible_directory": "/srv/ansible/acme",
                "ansible_inventory": "hosts.ini",
                "git_branch": "main",
            },
            "blog": {
                "project_label": "Blog",
                "ansible_directory": "/srv/ansible/blog",
                "ansible_inventory": "inventory",
                "drupal_root": "/var/www/blog/web",
            },
        },
        "environments": {
            "acme": {
                "staging": {
                    "site_alias": "@acme.staging",
                    "base_url": "https://staging.acme.test",
                    "drupal_root": "/var/www/acme/web",
                    "ansible_playbooks": {"deploy": "playbooks/deploy.yml"},
                },
                "prod": {
                    "site_alias": "@acme.prod",
                    "base_url": "https://www.acme.test",
                    "drupal_root": "/var/www/acme/web",
                    "ansible_directory": "/srv/ansible/acme-prod",
                    "ansible_playbooks": {
                        "deploy": "playbooks/deploy.yml",
                        "backup": "playbooks/backup.yml",
                    },
                    "git_branch": "release",
                },
            },
            "blog": {
                "live": {
                    "site_alias": "@blog.live",
                    "base_url": "https://blog.test",
                },
            },
        },
    }


@pytest.fixture
def config_file(tmp_dir: Path, sample_config: dict[str, Any]) -> Path:
    """Write the sample configuration to a JSON file."""
    path = tmp_dir / "projects.json"
    path.write_text(json.dumps(sample_config))
    return path


@pytest.fixture
def store(sample_config: dict[str, Any]) -> ConfigStore:
    """Build a ConfigStore from the sample configuration."""
    return ConfigStore.from_dict(sample_config)


def completed(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> MagicMock:
    """Fake subprocess.run result."""
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


def alias_json(alias: str, root: str = "/var/www/site/web") -> bytes:
    """Fake `drush site:alias --format=json` output for alias."""
    return json.dumps({alias: {"root": root, "uri": "https://example.test"}}).encode()
