"""Configuration loading for DuckLake connection profiles."""

import sys
from pathlib import Path
from typing import Dict, Union, Optional, Any

# Use tomllib for Python 3.11+, fallback to tomli for older versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .paths import resolve_config_path

# Profile keys that map onto Client constructor arguments
CLIENT_OPTION_KEYS = (
    "catalog_url",
    "storage_url",
    "snapshot_version",
    "snapshot_time",
    "data_inlining_row_limit",
    "create_if_not_exists",
    "override_data_path",
)


def _read_profiles(config_file: Path) -> Dict[str, Any]:
    with open(config_file, "rb") as f:
        return tomllib.load(f)


def load_profile(
    profile: str,
    path: Optional[Union[str, Path]] = None
) -> Dict[str, Any]:
    """
    Load a DuckLake connection profile from connections.toml file.

    Args:
        profile: Name of the profile to load
        path: Optional explicit path to connections.toml file.
              If None, searches in the config directory.

    Returns:
        Dictionary containing the settings for the profile

    Raises:
        FileNotFoundError: If connections.toml file is not found
        KeyError: If the specified profile doesn't exist in the file

    Example:
        >>> config = load_profile("dev")
        >>> config
        {'catalog_url': 'postgres://lake@localhost/lake', 'storage_url': 's3://bucket/lake/', ...}
    """
    config_file = resolve_config_path(path)

    if not config_file.exists():
        raise FileNotFoundError(
            f"lakelib configuration file not found at {config_file}. " +
            "Create a connections.toml file with one table per profile."
        )

    all_profiles = _read_profiles(config_file)

    if profile not in all_profiles:
        available = ", ".join(all_profiles.keys())
        raise KeyError(
            f"Profile '{profile}' not found in {config_file}. " +
            f"Available profiles: {available}"
        )

    return dict(all_profiles[profile])


def list_profiles(path: Optional[Union[str, Path]] = None) -> list[str]:
    """
    List all available profiles in connections.toml file.

    Example:
        >>> list_profiles()
        ['default', 'dev', 'prod']
    """
    config_file = resolve_config_path(path)

    if not config_file.exists():
        return []

    return list(_read_profiles(config_file).keys())


def client_options(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Pick the Client constructor arguments out of a profile"""
    return {key: cfg[key] for key in CLIENT_OPTION_KEYS if key in cfg}
