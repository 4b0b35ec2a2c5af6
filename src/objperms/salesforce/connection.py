"""Salesforce login from per-environment credential files."""

from __future__ import annotations

import configparser
import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import requests
from simple_salesforce import Salesforce
from simple_salesforce.exceptions import SalesforceAuthenticationFailed

from objperms.constants.config import CREDENTIALS_FILE_SUFFIX, CREDENTIALS_REQUIRED_KEYS, DEFAULT_API_VERSION
from objperms.exceptions import ConfigError, SalesforceConnectionError

logger = logging.getLogger(__name__)

_SECTION = "credentials"
_SALESFORCE_HOST_SUFFIX = ".salesforce.com"


@dataclass(frozen=True)
class Credentials:
    """Login details for one named environment."""

    environment: str
    username: str
    password: str
    token: str
    url: str

    @property
    def domain(self) -> str:
        return domain_from_url(self.url)


def load_credentials(environment: str, credentials_dir: Path) -> Credentials:
    """Read ``{credentials_dir}/{environment}.properties``."""
    path = credentials_dir.expanduser() / f"{environment}{CREDENTIALS_FILE_SUFFIX}"
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"No credentials for environment {environment!r}: {path} not found") from exc

    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read_string(f"[{_SECTION}]\n{text}", source=str(path))
    except configparser.Error as exc:
        raise ConfigError(f"Invalid credentials file {path}: {exc}") from exc

    values = parser[_SECTION]
    missing = [key for key in CREDENTIALS_REQUIRED_KEYS if not values.get(key)]
    if missing:
        raise ConfigError(f"Credentials file {path} is missing: {', '.join(missing)}")

    return Credentials(
        environment=environment,
        username=values["username"],
        password=values["password"],
        token=values.get("token", ""),
        url=values["url"],
    )


def domain_from_url(url: str) -> str:
    """Map a login URL to the ``domain`` argument of ``simple_salesforce``.

    ``https://test.salesforce.com`` gives ``test``; a My Domain URL such as
    ``https://acme.my.salesforce.com`` gives ``acme.my``.
    """
    host = (urlparse(url).hostname or "").lower()
    if not host.endswith(_SALESFORCE_HOST_SUFFIX):
        raise ConfigError(f"Unsupported Salesforce login URL: {url!r}")
    return host.removesuffix(_SALESFORCE_HOST_SUFFIX)


def connect(environment: str, credentials_dir: Path, *, api_version: str = DEFAULT_API_VERSION) -> Salesforce:
    """Log in to the named environment and return the connection."""
    credentials = load_credentials(environment, credentials_dir)
    logger.info("Logging in to %s as %s", environment, credentials.username)
    try:
        return Salesforce(
            username=credentials.username,
            password=credentials.password,
            security_token=credentials.token,
            domain=credentials.domain,
            version=api_version,
        )
    except (SalesforceAuthenticationFailed, requests.RequestException) as exc:
        raise SalesforceConnectionError(f"Login to {environment!r} failed: {exc}") from exc
