"""Path resolution for lakelib configuration files."""

import os
from pathlib import Path
from typing import Optional, Union


def _get_config_directory() -> Path:
    """
    Get the configuration directory for lakelib.

    Priority order:
    1. LAKELIB_CONFIG_DIR environment variable (override)
    2. ~/.lakelib/ (dotfile directory in user home)

    Returns:
        Path: Configuration directory path
    """
    env_config_dir = os.getenv("LAKELIB_CONFIG_DIR")
    if env_config_dir:
        return Path(env_config_dir)

    return Path.home() / ".lakelib"


# Configuration directory (dynamically resolved)
CONF_DIR = _get_config_directory()


def get_default_config_path() -> Path:
    """
    Get the path to connections.toml configuration file.

    Returns:
        Path: The path to connections.toml

    Raises:
        FileNotFoundError: If connections.toml doesn't exist in the config directory
    """
    config_path = CONF_DIR / "connections.toml"

    if not config_path.exists():
        error_msg = (
            f"Configuration file 'connections.toml' not found at: {config_path}\n\n"
            f"To create it, add one table per profile, for example:\n"
            f"  [dev]\n"
            f"  catalog_url = \"postgres://user@localhost/lake\"\n"
            f"  storage_url = \"s3://bucket/lake/\"\n\n"
            f"Configuration directory priority:\n"
            f"  1. LAKELIB_CONFIG_DIR environment variable (if set)\n"
            f"  2. ~/.lakelib/ (dotfile directory)\n"
        )

        raise FileNotFoundError(error_msg)

    return config_path


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    """
    Resolve the configuration file path.

    Args:
        path: Optional explicit path to connections.toml file.
              If None, uses default resolution logic.

    Returns:
        Path: Resolved path object
    """
    if path:
        return Path(path)
    return get_default_config_path()
