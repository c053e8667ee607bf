"""Validation and defaulting of identity gateway authentication backend configuration."""

from .schema import (
    AuthenticationBackendConfiguration,
    FileAuthenticationBackendConfiguration,
    LDAPAuthenticationBackendConfiguration,
    PasswordConfiguration,
)
from .sink import ErrorSink
from .validator import validate_authentication_backend, validate_ldap_url

__all__ = [
    "AuthenticationBackendConfiguration",
    "ErrorSink",
    "FileAuthenticationBackendConfiguration",
    "LDAPAuthenticationBackendConfiguration",
    "PasswordConfiguration",
    "validate_authentication_backend",
    "validate_ldap_url",
]
