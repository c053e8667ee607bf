"""LDAP authentication backend validation."""

import ssl

import structlog

from ..schema import (
    DEFAULT_LDAP_AUTHENTICATION_BACKEND_ACTIVE_DIRECTORY_CONFIGURATION,
    DEFAULT_LDAP_AUTHENTICATION_BACKEND_CONFIGURATION,
    LDAP_IMPLEMENTATION_ACTIVE_DIRECTORY,
    LDAP_IMPLEMENTATION_CUSTOM,
    LDAPAuthenticationBackendConfiguration,
    LDAPProfile,
)
from ..sink import ErrorSink
from .filters import check_groups_filter, check_users_filter
from .url import validate_ldap_url

logger = structlog.get_logger()

_TLS_VERSION_MAP = {
    "TLS1.3": ssl.TLSVersion.TLSv1_3,
    "TLS1.2": ssl.TLSVersion.TLSv1_2,
    "TLS1.1": ssl.TLSVersion.TLSv1_1,
    "TLS1.0": ssl.TLSVersion.TLSv1,
}

# Fields each implementation fills in when left blank
_IMPLEMENTATION_DEFAULTS: dict[str, tuple[LDAPProfile, tuple[str, ...]]] = {
    LDAP_IMPLEMENTATION_CUSTOM: (
        DEFAULT_LDAP_AUTHENTICATION_BACKEND_CONFIGURATION,
        ("group_name_attribute", "mail_attribute", "display_name_attribute"),
    ),
    LDAP_IMPLEMENTATION_ACTIVE_DIRECTORY: (
        DEFAULT_LDAP_AUTHENTICATION_BACKEND_ACTIVE_DIRECTORY_CONFIGURATION,
        (
            "users_filter",
            "username_attribute",
            "mail_attribute",
            "display_name_attribute",
            "groups_filter",
            "group_name_attribute",
        ),
    ),
}

_REQUIRED_FIELDS = (
    ("user", "Please provide a user name to connect to the LDAP server"),
    ("password", "Please provide a password to connect to the LDAP server"),
    ("base_dn", "Please provide a base DN to connect to the LDAP server"),
)


def tls_version_from_string(label: str) -> ssl.TLSVersion:
    """Map a configured TLS version label such as ``TLS1.2`` to ssl.TLSVersion.

    Raises:
        ValueError: If the label is not a supported TLS version
    """
    try:
        return _TLS_VERSION_MAP[label]
    except KeyError:
        raise ValueError("supplied TLS version isn't supported") from None


def _apply_implementation_defaults(
    config: LDAPAuthenticationBackendConfiguration,
    profile: LDAPProfile,
    names: tuple[str, ...],
) -> None:
    for name in names:
        if getattr(config, name) == "":
            setattr(config, name, getattr(profile, name))
            logger.debug(
                "Applied LDAP default",
                implementation=profile.implementation,
                field=name,
                value=getattr(profile, name),
            )


def validate_ldap_backend(
    config: LDAPAuthenticationBackendConfiguration, sink: ErrorSink
) -> None:
    """Validate an LDAP backend and fill implementation specific defaults."""
    if config.implementation == "":
        config.implementation = DEFAULT_LDAP_AUTHENTICATION_BACKEND_CONFIGURATION.implementation

    if config.implementation in _IMPLEMENTATION_DEFAULTS:
        profile, names = _IMPLEMENTATION_DEFAULTS[config.implementation]
        _apply_implementation_defaults(config, profile, names)
    else:
        sink.append(
            "authentication backend ldap implementation must be blank or one of "
            "the following values `custom`, `activedirectory`"
        )

    if config.minimum_tls_version == "":
        config.minimum_tls_version = (
            DEFAULT_LDAP_AUTHENTICATION_BACKEND_CONFIGURATION.minimum_tls_version
        )
    try:
        tls_version_from_string(config.minimum_tls_version)
    except ValueError as e:
        sink.append(
            "error occurred validating the LDAP minimum_tls_version key "
            f"with value {config.minimum_tls_version}: {e}"
        )

    if config.url == "":
        sink.append("Please provide a URL to the LDAP server")
    else:
        config.url = validate_ldap_url(config.url, sink)

    for name, message in _REQUIRED_FIELDS:
        if getattr(config, name) == "":
            sink.append(message)

    if config.users_filter == "":
        sink.append("Please provide a users filter with `users_filter` attribute")
    else:
        check_users_filter(config.users_filter, sink)

    if config.groups_filter == "":
        sink.append("Please provide a groups filter with `groups_filter` attribute")
    else:
        check_groups_filter(config.groups_filter, sink)
