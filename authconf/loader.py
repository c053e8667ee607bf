"""Configuration loader for the `authentication_backend` YAML section."""

import os
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, TypeVar

import structlog
import yaml

from .schema import (
    AuthenticationBackendConfiguration,
    FileAuthenticationBackendConfiguration,
    LDAPAuthenticationBackendConfiguration,
    PasswordConfiguration,
)

logger = structlog.get_logger()

DEFAULT_CONFIG_PATH = "/etc/authconf/configuration.yml"
SECTION = "authentication_backend"
MASK = "<redacted>"

T = TypeVar("T")


class ConfigurationLoadError(Exception):
    """Raised when a configuration file cannot be read or has the wrong shape."""

    pass


def _coerce(value: Any, expected: type, key: str) -> Any:
    """Convert a YAML scalar to the type declared on the dataclass field."""
    if expected is bool:
        if isinstance(value, bool):
            return value
    elif expected is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif expected is str:
        if isinstance(value, str):
            return value
        # YAML reads `refresh_interval: 300` as an integer
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
    raise ConfigurationLoadError(
        f"`{key}` must be of type {expected.__name__}, got {type(value).__name__}"
    )


def _build(cls: type[T], data: Any, key: str, nested: dict[str, Any] | None = None) -> T:
    """Build a dataclass of type cls from a mapping, warning on unknown keys."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationLoadError(f"`{key}` must be a mapping")

    nested = nested or {}
    known = {f.name: f for f in fields(cls)}  # type: ignore[arg-type]
    kwargs: dict[str, Any] = {}

    for name, value in data.items():
        field_key = f"{key}.{name}"
        if name not in known:
            logger.warning("Ignoring unknown configuration key", key=field_key)
            continue
        if value is None:
            continue
        if name in nested:
            kwargs[name] = nested[name](value, field_key)
        else:
            kwargs[name] = _coerce(value, type(known[name].default), field_key)

    return cls(**kwargs)


def _password(data: Any, key: str) -> PasswordConfiguration:
    return _build(PasswordConfiguration, data, key)


def _file_backend(data: Any, key: str) -> FileAuthenticationBackendConfiguration:
    return _build(
        FileAuthenticationBackendConfiguration, data, key, {"password": _password}
    )


def _ldap_backend(data: Any, key: str) -> LDAPAuthenticationBackendConfiguration:
    return _build(LDAPAuthenticationBackendConfiguration, data, key)


def parse_authentication_backend(data: Any) -> AuthenticationBackendConfiguration:
    """Build an AuthenticationBackendConfiguration from the parsed YAML section.

    Only the shape of the data is checked here; semantic validation and
    defaults are the job of validate_authentication_backend.

    Raises:
        ConfigurationLoadError: If a key has the wrong type
    """
    return _build(
        AuthenticationBackendConfiguration,
        data,
        SECTION,
        {"file": _file_backend, "ldap": _ldap_backend},
    )


class ConfigLoader:
    """Loads the `authentication_backend` section from a YAML configuration file."""

    def __init__(self, config_file: str = DEFAULT_CONFIG_PATH):
        self.config_file = Path(config_file)

    def load(self) -> AuthenticationBackendConfiguration:
        """Load and parse the configuration file.

        Raises:
            ConfigurationLoadError: If the file is missing, is not valid YAML
                or has the wrong shape
        """
        if not self.config_file.exists():
            logger.error("Configuration file does not exist", file=str(self.config_file))
            raise ConfigurationLoadError(
                f"Configuration file not found: {self.config_file}"
            )

        try:
            with open(self.config_file) as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(
                "Failed to parse configuration file",
                file=str(self.config_file),
                error=str(e),
            )
            raise ConfigurationLoadError(
                f"Invalid YAML in {self.config_file}: {e}"
            ) from e

        if content is None:
            content = {}
        if not isinstance(content, dict):
            raise ConfigurationLoadError(
                f"Configuration file {self.config_file} must contain a mapping"
            )

        logger.debug("Loaded configuration file", file=str(self.config_file))
        return parse_authentication_backend(content.get(SECTION))


def get_config_loader() -> ConfigLoader:
    """Get configured config loader instance."""
    config_file = os.getenv("AUTHCONF_CONFIG_PATH", DEFAULT_CONFIG_PATH)
    return ConfigLoader(config_file)


def dump_configuration(config: AuthenticationBackendConfiguration) -> dict[str, Any]:
    """Render a configuration as plain data with secrets masked."""
    data = asdict(config)
    for backend in ("file", "ldap"):
        if data[backend] is None:
            del data[backend]
    if "ldap" in data and data["ldap"]["password"]:
        data["ldap"]["password"] = MASK
    return data
