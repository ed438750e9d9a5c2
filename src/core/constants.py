"""Core constants used across bundle index modules.

This module centralizes file names, environment variables and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

HOME_ENV_VAR = "BUNDLE_INDEX_HOME"
PLUGINS_ENV_VAR = "BUNDLE_INDEX_PLUGINS"
LOG_LEVEL_ENV_VAR = "BUNDLE_INDEX_LOG_LEVEL"
USER_HOME_ENV_VAR = "HOME"
WINDOWS_USER_HOME_ENV_VAR = "USERPROFILE"
DEFAULT_HOME_DIR_NAME = ".bundle-index"
CONFIG_FILE_NAME = "config.toml"
LOGS_DIR_NAME = "logs"
PLUGINS_DIR_NAME = "plugins"
INDEX_FILE_NAME = "repositories.json"
DEFAULT_INDEX_FILE_MODE = 0o644
INDEX_JSON_INDENT = 4
WILDCARD_CONSTRAINT = "*"
DEFAULT_LOG_LEVEL = "WARNING"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
