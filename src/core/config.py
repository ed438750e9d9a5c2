"""Runtime configuration model for the bundle index.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import sys

from core.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_HOME_DIR_NAME,
    DEFAULT_LOG_LEVEL,
    HOME_ENV_VAR,
    INDEX_FILE_NAME,
    LOG_LEVEL_ENV_VAR,
    LOGS_DIR_NAME,
    PLUGINS_DIR_NAME,
    PLUGINS_ENV_VAR,
    SUPPORTED_LOG_LEVELS,
    USER_HOME_ENV_VAR,
    WINDOWS_USER_HOME_ENV_VAR,
)
from core.errors import BundleConfigError


@dataclass(frozen=True)
class BundleHomeConfig:
    """Validated runtime configuration.

    Attributes:
        home: Root directory for the index file, config and logs.
        log_level: Minimum level for structured log output.
        plugins_override: Explicit plugins directory, if configured.
    """

    home: Path
    log_level: str
    plugins_override: Path | None = None

    @classmethod
    def from_env(cls) -> "BundleHomeConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            BundleConfigError: If environment values are invalid.
        """
        home = Path(default_home()).expanduser()
        plugins_value = os.getenv(PLUGINS_ENV_VAR, "")
        plugins_override = Path(plugins_value).expanduser() if plugins_value else None
        log_level = _parse_log_level(os.getenv(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL))
        return cls(home=home, log_level=log_level, plugins_override=plugins_override)

    def path(self, *elements: str) -> Path:
        """Return the home directory with path elements appended."""
        return self.home.joinpath(*elements)

    @property
    def plugins_dir(self) -> Path:
        return self.plugins_override or self.path(PLUGINS_DIR_NAME)

    @property
    def config_file(self) -> Path:
        return self.path(CONFIG_FILE_NAME)

    @property
    def logs_dir(self) -> Path:
        return self.path(LOGS_DIR_NAME)

    @property
    def index_file(self) -> Path:
        return self.path(INDEX_FILE_NAME)


def default_home() -> str:
    """Resolve the default home directory from the environment.

    The explicit home variable wins. Otherwise the user's home directory
    is used, falling back to the Windows profile variable when unset there.

    Returns:
        Home directory path string.
    """
    home = os.getenv(HOME_ENV_VAR, "")
    if home:
        return home
    user_home = os.getenv(USER_HOME_ENV_VAR, "")
    if not user_home and _is_windows():
        user_home = os.getenv(WINDOWS_USER_HOME_ENV_VAR, "")
    return os.path.join(user_home, DEFAULT_HOME_DIR_NAME)


def _is_windows() -> bool:
    return sys.platform == "win32"


def _parse_log_level(raw_value: str) -> str:
    """Parse the log level environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Upper-cased level name.

    Raises:
        BundleConfigError: If value is not a supported level.
    """
    level = raw_value.strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        raise BundleConfigError(
            f"Invalid {LOG_LEVEL_ENV_VAR} value: "
            f"expected one of {', '.join(SUPPORTED_LOG_LEVELS)}, got '{raw_value}'. "
            f"Unset {LOG_LEVEL_ENV_VAR} or choose a supported level."
        )
    return level
