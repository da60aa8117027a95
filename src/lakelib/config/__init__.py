"""Configuration module exports."""

from .config import load_profile, list_profiles, client_options, CLIENT_OPTION_KEYS
from .paths import resolve_config_path, get_default_config_path, CONF_DIR

__all__ = [
    "load_profile",
    "list_profiles",
    "client_options",
    "CLIENT_OPTION_KEYS",
    "resolve_config_path",
    "get_default_config_path",
    "CONF_DIR",
]
