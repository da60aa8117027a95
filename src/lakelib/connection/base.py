"""Base connector class with shared profile and catalog credential logic."""

import os
from typing import Optional, Any, Dict
from urllib.parse import quote as url_quote, urlsplit, urlunsplit

from pydantic import SecretStr
import keyring

from lakelib.config import load_profile, client_options


class BaseConnector:
    """Base class for lakelib connectors with TOML profile support and catalog credential handling"""

    def __init__(self, profile: Optional[str] = None, **kwargs: Any) -> None:
        """Initialize the connector with an optional configuration profile and parameter overrides"""
        self.catalog_password: Optional[SecretStr] = None

        self._cfg: Dict[str, Any] = load_profile(profile) if profile else {}
        self._cfg.update(kwargs)
        self._profile = profile
        self._process_auth()

    def _process_auth(self) -> None:
        """Resolve the catalog password from an environment variable or the keyring and add it to the catalog URL"""
        self.catalog_password = self._get_catalog_password()
        if self.catalog_password is None:
            return

        catalog_url = self._cfg.get("catalog_url")
        if catalog_url:
            self._cfg["catalog_url"] = _with_password(catalog_url, self.catalog_password)

    def _get_catalog_password(self) -> Optional[SecretStr]:
        """Look up the catalog password, environment variable first"""
        password_env_var = self._cfg.get("catalog_password_env")
        if password_env_var:
            env_pass = os.environ.get(password_env_var)
            if env_pass:
                return SecretStr(env_pass)

        if not self._cfg.get("use_keyring", False):
            return None

        default_service = f"lakelib.{self._profile}" if self._profile else "lakelib"
        keyring_service = self._cfg.get("keyring_service", default_service)
        keyring_username = self._cfg.get("keyring_username") or _url_username(self._cfg.get("catalog_url", ""))
        if not keyring_username:
            raise ValueError(
                "Keyring usage requires a user in 'catalog_url' or a 'keyring_username' override."
            )

        keyring_pass = keyring.get_password(keyring_service, keyring_username)
        if keyring_pass:
            return SecretStr(keyring_pass)
        return None

    def settings(self) -> Dict[str, Any]:
        """Client constructor arguments from the profile and overrides"""
        return client_options(self._cfg)


def _url_username(url: str) -> Optional[str]:
    return urlsplit(url).username


def _with_password(url: str, password: SecretStr) -> str:
    """Add a password to a URL that has a user and no password of its own"""
    parts = urlsplit(url)
    if not parts.username or parts.password is not None:
        return url

    userinfo, _, hostinfo = parts.netloc.rpartition("@")
    secret = url_quote(password.get_secret_value(), safe="")
    return urlunsplit(parts._replace(netloc=f"{userinfo}:{secret}@{hostinfo}"))
