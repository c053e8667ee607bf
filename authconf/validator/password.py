"""Password hashing policy validation for the file backend."""

from dataclasses import fields

import structlog

from ..schema import (
    ARGON2ID,
    DEFAULT_PASSWORD_CONFIGURATION,
    DEFAULT_PASSWORD_SHA512_CONFIGURATION,
    SHA512,
    PasswordConfiguration,
    PasswordProfile,
)
from ..sink import ErrorSink

logger = structlog.get_logger()

_PROFILES: dict[str, PasswordProfile] = {
    ARGON2ID: DEFAULT_PASSWORD_CONFIGURATION,
    SHA512: DEFAULT_PASSWORD_SHA512_CONFIGURATION,
}

ARGON2ID_KEY_LENGTH = 16
MIN_SALT_LENGTH = 2
MIN_ITERATIONS = 1
MIN_PARALLELISM = 1
MEMORY_PER_THREAD = 8


def _apply_profile(config: PasswordConfiguration, profile: PasswordProfile) -> None:
    """Fill every zero valued field of config from profile."""
    for f in fields(profile):
        if f.name == "algorithm":
            continue
        if getattr(config, f.name) == 0:
            setattr(config, f.name, getattr(profile, f.name))
            logger.debug(
                "Applied password default",
                algorithm=profile.algorithm,
                field=f.name,
                value=getattr(profile, f.name),
            )


def _check_argon2id(config: PasswordConfiguration, sink: ErrorSink) -> None:
    if config.key_length != ARGON2ID_KEY_LENGTH:
        sink.append(
            f"Key length for argon2id must be {ARGON2ID_KEY_LENGTH}, "
            f"you configured {config.key_length}"
        )

    if config.salt_length < MIN_SALT_LENGTH:
        sink.append(
            f"The salt length must be {MIN_SALT_LENGTH} or more, "
            f"you configured {config.salt_length}"
        )

    if config.iterations < MIN_ITERATIONS:
        sink.append(
            "The number of iterations specified is invalid, "
            f"must be {MIN_ITERATIONS} or more, you configured {config.iterations}"
        )

    if config.parallelism < MIN_PARALLELISM:
        sink.append(
            f"Parallelism for argon2id must be {MIN_PARALLELISM} or more, "
            f"you configured {config.parallelism}"
        )

    # Fixed message text; the threshold itself follows parallelism
    if config.memory < config.parallelism * MEMORY_PER_THREAD:
        sink.append(
            "Memory for argon2id must be 16 or more (parallelism * 8), "
            f"you configured memory as {config.memory} "
            f"and parallelism as {config.parallelism}"
        )


def validate_password_configuration(
    config: PasswordConfiguration, sink: ErrorSink
) -> None:
    """Validate hashing parameters and fill blank ones from the algorithm defaults.

    A blank algorithm means argon2id. Fields left at zero take the defaults of
    the resolved algorithm; supplied argon2id fields are bounds checked, sha512
    fields are taken as given. An unknown algorithm is reported and nothing
    else is touched.
    """
    if config.algorithm == "":
        config.algorithm = DEFAULT_PASSWORD_CONFIGURATION.algorithm

    profile = _PROFILES.get(config.algorithm)
    if profile is None:
        sink.append(
            "Unknown hashing algorithm supplied, valid values are argon2id and sha512, "
            f"you configured '{config.algorithm}'"
        )
        return

    _apply_profile(config, profile)

    if config.algorithm == ARGON2ID:
        _check_argon2id(config, sink)
