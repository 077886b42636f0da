"""Project Tools constants."""

from __future__ import annotations

# Configuration discovery
CONFIG_ENV_VAR = "PROJECT_TOOLS_CONFIG"
CONFIG_DIR_NAME = ".project_tools"
CONFIG_FILE_NAME = "projects.json"

# External tools (overridable through the environment or CLI options)
DRUSH_ENV_VAR = "PROJECT_TOOLS_DRUSH"
DEFAULT_DRUSH = "drush"
ANSIBLE_PLAYBOOK_ENV_VAR = "PROJECT_TOOLS_ANSIBLE_PLAYBOOK"
DEFAULT_ANSIBLE_PLAYBOOK = "ansible-playbook"

# Same convention as coreutils timeout(1)
TIMEOUT_EXIT_CODE = 124

# Drush commands used by the orchestrator and status
STATUS_COMMAND = "core-status"
MAINTENANCE_MODE_KEY = "system.maintenance_mode"
ALIAS_COMMAND = "site:alias"

# project script: looked up in <drupal root>/../scripts
SCRIPTS_DIR_NAME = "scripts"
SCRIPT_EXTENSIONS = ("", ".sh", ".py")

URL_PROBE_TIMEOUT_S = 10
