"""Validators for the `authentication_backend` configuration section."""

from .backend import (
    validate_authentication_backend,
    validate_file_backend,
    validate_refresh_interval,
)
from .filters import check_filter, check_groups_filter, check_users_filter
from .ldap import tls_version_from_string, validate_ldap_backend
from .password import validate_password_configuration
from .url import validate_ldap_url

__all__ = [
    "check_filter",
    "check_groups_filter",
    "check_users_filter",
    "tls_version_from_string",
    "validate_authentication_backend",
    "validate_file_backend",
    "validate_ldap_backend",
    "validate_ldap_url",
    "validate_password_configuration",
    "validate_refresh_interval",
]
