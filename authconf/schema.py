"""Configuration schema and built-in default profiles for authentication backends."""

from dataclasses import dataclass, field, fields

ARGON2ID = "argon2id"
SHA512 = "sha512"

LDAP_IMPLEMENTATION_CUSTOM = "custom"
LDAP_IMPLEMENTATION_ACTIVE_DIRECTORY = "activedirectory"

REFRESH_INTERVAL_DISABLE = "disable"
REFRESH_INTERVAL_ALWAYS = "always"
DEFAULT_REFRESH_INTERVAL = "5m"


@dataclass
class PasswordConfiguration:
    """Password hashing parameters for the file backend."""

    algorithm: str = ""
    iterations: int = 0
    key_length: int = 0
    salt_length: int = 0
    memory: int = 0
    parallelism: int = 0


@dataclass
class FileAuthenticationBackendConfiguration:
    """File (users database) authentication backend."""

    path: str = ""
    password: PasswordConfiguration | None = field(
        default_factory=PasswordConfiguration
    )


@dataclass
class LDAPAuthenticationBackendConfiguration:
    """LDAP authentication backend."""

    implementation: str = ""
    url: str = ""
    start_tls: bool = False
    skip_verify: bool = False
    minimum_tls_version: str = ""
    base_dn: str = ""
    additional_users_dn: str = ""
    users_filter: str = ""
    additional_groups_dn: str = ""
    groups_filter: str = ""
    group_name_attribute: str = ""
    username_attribute: str = ""
    mail_attribute: str = ""
    display_name_attribute: str = ""
    user: str = ""
    password: str = ""


@dataclass
class AuthenticationBackendConfiguration:
    """The `authentication_backend` section. Exactly one of file/ldap is expected."""

    file: FileAuthenticationBackendConfiguration | None = None
    ldap: LDAPAuthenticationBackendConfiguration | None = None
    refresh_interval: str = ""
    disable_reset_password: bool = False

    @property
    def backend(
        self,
    ) -> FileAuthenticationBackendConfiguration | LDAPAuthenticationBackendConfiguration | None:
        """The configured backend, or None unless exactly one is set."""
        if (self.file is None) == (self.ldap is None):
            return None
        return self.file if self.file is not None else self.ldap


@dataclass(frozen=True)
class PasswordProfile:
    """Read-only set of password hashing defaults."""

    algorithm: str
    iterations: int = 0
    key_length: int = 0
    salt_length: int = 0
    memory: int = 0
    parallelism: int = 0

    def to_configuration(self) -> PasswordConfiguration:
        return PasswordConfiguration(
            **{f.name: getattr(self, f.name) for f in fields(self)}
        )


@dataclass(frozen=True)
class LDAPProfile:
    """Read-only set of LDAP defaults for one directory implementation."""

    implementation: str
    minimum_tls_version: str = ""
    users_filter: str = ""
    groups_filter: str = ""
    username_attribute: str = ""
    mail_attribute: str = ""
    display_name_attribute: str = ""
    group_name_attribute: str = ""


DEFAULT_PASSWORD_CONFIGURATION = PasswordProfile(
    algorithm=ARGON2ID,
    iterations=1,
    key_length=16,
    salt_length=16,
    memory=1024,
    parallelism=8,
)

DEFAULT_PASSWORD_SHA512_CONFIGURATION = PasswordProfile(
    algorithm=SHA512,
    iterations=50000,
    salt_length=16,
)

DEFAULT_LDAP_AUTHENTICATION_BACKEND_CONFIGURATION = LDAPProfile(
    implementation=LDAP_IMPLEMENTATION_CUSTOM,
    minimum_tls_version="TLS1.2",
    mail_attribute="mail",
    display_name_attribute="displayname",
    group_name_attribute="cn",
)

DEFAULT_LDAP_AUTHENTICATION_BACKEND_ACTIVE_DIRECTORY_CONFIGURATION = LDAPProfile(
    implementation=LDAP_IMPLEMENTATION_ACTIVE_DIRECTORY,
    minimum_tls_version="TLS1.2",
    users_filter=(
        "(&(|({username_attribute}={input})({mail_attribute}={input}))"
        "(sAMAccountType=805306368)"
        "(!(userAccountControl:1.2.840.113556.1.4.803:=2))"
        "(!(pwdLastSet=0)))"
    ),
    groups_filter="(&(member={dn})(objectClass=group))",
    username_attribute="sAMAccountName",
    mail_attribute="mail",
    display_name_attribute="displayName",
    group_name_attribute="cn",
)
