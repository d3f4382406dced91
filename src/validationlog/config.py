"""
Configuration of the default enabled validation levels.

Levels are looked up, first match wins, in:

1. The VALIDATIONLOG_LEVELS environment variable
2. The project config (.validationlog.yml, searched upwards from the start directory)
3. The user config (platformdirs user config dir)
4. The machine config (platformdirs site config dir)
5. The built-in default (Information, Warning, Error)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import platformdirs
import yaml

from validationlog.levels import DEFAULT_LEVELS, ValidationLevel, level_name, parse_levels
from validationlog.logging import Logger, NullLogger

__all__ = [
    "ENV_VAR",
    "PROJECT_CONFIG_NAME",
    "get_user_config_path",
    "get_machine_config_path",
    "find_project_config",
    "parse_config_file",
    "load_enabled_levels",
    "ConfigError",
]

APP_NAME = "validationlog"
ENV_VAR = "VALIDATIONLOG_LEVELS"
PROJECT_CONFIG_NAME = ".validationlog.yml"


class ConfigError(Exception):
    """Raised when a configuration file or environment value is invalid."""

    pass


def get_machine_config_path() -> Path:
    """
    Get the path to the machine-level (system-wide) configuration file.

    Returns:
        Path to the machine config file (may not exist)
    """
    return Path(platformdirs.site_config_dir(APP_NAME)) / "config.yml"


def get_user_config_path() -> Path:
    """
    Get the path to the user-level configuration file.

    Returns:
        Path to the user config file (may not exist)
    """
    return Path(platformdirs.user_config_dir(APP_NAME)) / "config.yml"


def find_project_config(start_dir: Path) -> Optional[Path]:
    """
    Walk up the directory tree from start_dir to find .validationlog.yml.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to the project config if found, None otherwise
    """
    try:
        current = start_dir.resolve()
    except (OSError, RuntimeError):
        # resolve() raises RuntimeError on symlink loops
        return None

    # Safety limit for pathological filesystems
    for _ in range(100):
        config_path = current / PROJECT_CONFIG_NAME
        try:
            if config_path.is_file():
                return config_path
        except OSError:
            pass

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def parse_config_file(path: Path) -> Optional[ValidationLevel]:
    """
    Parse a configuration file and return the enabled levels it defines.

    Missing files, empty files and files without an 'enabled_levels' key are
    valid and return None, meaning the file has no opinion.

    Args:
        path: Path to the configuration file

    Returns:
        The configured levels, or None if the file does not set them

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, is not a
            mapping, or names an unknown level

    Config File Examples:

        ```yaml
        enabled_levels: Warning|Error
        ```

        ```yaml
        enabled_levels:
          - Information
          - Warning
          - Error
        ```
    """
    if not path.exists():
        return None

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Error reading config file '{path}': {e}") from e

    if not content.strip():
        return None

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML in config file '{path}': {e}") from e

    if data is None:
        return None

    if not isinstance(data, dict):
        raise ConfigError(
            f"Error in config file '{path}': top level must be a dictionary"
        )

    if "enabled_levels" not in data:
        return None

    value = data["enabled_levels"]
    if isinstance(value, list):
        if not all(isinstance(item, str) for item in value):
            raise ConfigError(
                f"Error in config file '{path}': 'enabled_levels' list must contain only strings"
            )
        value = "|".join(value)
    elif value is None:
        value = ""
    elif not isinstance(value, str):
        raise ConfigError(
            f"Error in config file '{path}': 'enabled_levels' must be a string or a list"
        )

    try:
        return parse_levels(value)
    except ValueError as e:
        raise ConfigError(f"Error in config file '{path}': {e}") from e


def load_enabled_levels(
    start_dir: Optional[Path] = None, logger: Optional[Logger] = None
) -> ValidationLevel:
    """
    Resolve the enabled levels from the environment and config files.

    Args:
        start_dir: Directory to search for a project config (default: cwd)
        logger: Optional logger for diagnostic output

    Returns:
        The levels from the first source that defines them, or DEFAULT_LEVELS

    Raises:
        ConfigError: If the environment variable or a consulted config file is invalid
    """
    logger = logger if logger is not None else NullLogger()

    env_value = os.environ.get(ENV_VAR)
    if env_value is not None:
        try:
            levels = parse_levels(env_value)
        except ValueError as e:
            raise ConfigError(f"Invalid {ENV_VAR} value: {e}") from e
        logger.debug(f"Enabled levels from {ENV_VAR}: {level_name(levels)}")
        return levels

    candidates = []
    project_config = find_project_config(start_dir if start_dir is not None else Path.cwd())
    if project_config is not None:
        candidates.append(project_config)
    candidates.append(get_user_config_path())
    candidates.append(get_machine_config_path())

    for path in candidates:
        levels = parse_config_file(path)
        if levels is not None:
            logger.debug(f"Enabled levels from {path}: {level_name(levels)}")
            return levels

    logger.debug(f"Using default enabled levels: {level_name(DEFAULT_LEVELS)}")
    return DEFAULT_LEVELS
