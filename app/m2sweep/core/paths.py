"""XDG-compliant path management for m2sweep.

This module provides standardized paths following the XDG Base Directory
Specification for configuration, plus the location of the local
repository to clean.

XDG defaults:
- Config: ~/.config/m2sweep/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "m2sweep"

# Environment variable overriding the default repository location
REPOSITORY_ENV_VAR = "M2SWEEP_REPOSITORY"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/m2sweep/ (or XDG_CONFIG_HOME/m2sweep/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/m2sweep/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/m2sweep/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_default_repository() -> Path:
    """Get the local repository to clean when none is configured.

    Returns:
        Path from M2SWEEP_REPOSITORY, or ~/.m2/repository.
    """
    override = os.environ.get(REPOSITORY_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".m2" / "repository"


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
