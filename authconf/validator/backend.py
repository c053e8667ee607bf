"""Authentication backend selection and file backend validation."""

import structlog

from ..duration import DurationParseError, parse_duration
from ..schema import (
    DEFAULT_REFRESH_INTERVAL,
    REFRESH_INTERVAL_ALWAYS,
    REFRESH_INTERVAL_DISABLE,
    AuthenticationBackendConfiguration,
    FileAuthenticationBackendConfiguration,
    PasswordConfiguration,
)
from ..sink import ErrorSink
from .ldap import validate_ldap_backend
from .password import validate_password_configuration

logger = structlog.get_logger()


def validate_file_backend(
    config: FileAuthenticationBackendConfiguration, sink: ErrorSink
) -> None:
    """Validate the users database path and its password policy."""
    if config.path == "":
        sink.append(
            "Please provide a `path` for the users database in `authentication_backend`"
        )

    if config.password is None:
        config.password = PasswordConfiguration()

    validate_password_configuration(config.password, sink)


def validate_refresh_interval(
    config: AuthenticationBackendConfiguration, sink: ErrorSink
) -> None:
    """Default an empty refresh_interval and reject unparseable durations."""
    if config.refresh_interval == "":
        config.refresh_interval = DEFAULT_REFRESH_INTERVAL
        return

    if config.refresh_interval in (REFRESH_INTERVAL_DISABLE, REFRESH_INTERVAL_ALWAYS):
        return

    try:
        parse_duration(config.refresh_interval)
    except DurationParseError as e:
        sink.append(
            "Auth Backend `refresh_interval` is configured to "
            f"'{config.refresh_interval}' but it must be either a duration notation "
            f"or one of 'disable', or 'always'. Error from parser: {e}"
        )


def validate_authentication_backend(
    config: AuthenticationBackendConfiguration, sink: ErrorSink
) -> None:
    """Validate the `authentication_backend` section, applying defaults in place.

    Problems are appended to sink rather than raised; the configuration is
    valid when the sink holds no messages afterwards. When no backend or both
    backends are configured, the problem is reported and nothing else is
    checked.

    Args:
        config: Parsed `authentication_backend` section, mutated in place
        sink: Error sink shared with the rest of the validation session
    """
    errors_before = sink.count()

    if config.file is None and config.ldap is None:
        sink.append("Please provide `ldap` or `file` object in `authentication_backend`")
        return

    if config.file is not None and config.ldap is not None:
        sink.append(
            "You cannot provide both `ldap` and `file` objects in `authentication_backend`"
        )
        return

    if config.file is not None:
        validate_file_backend(config.file, sink)
    else:
        validate_ldap_backend(config.ldap, sink)

    validate_refresh_interval(config, sink)

    logger.info(
        "Validated authentication backend",
        backend="file" if config.file is not None else "ldap",
        errors=sink.count() - errors_before,
    )
