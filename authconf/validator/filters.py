"""LDAP search filter syntax checks."""

from collections.abc import Iterable

from ..sink import ErrorSink

LDAP_DOCS_URL = "https://docs.authelia.com/configuration/authentication/ldap.html"

USERS_FILTER_PLACEHOLDERS = {
    "{username_attribute}": (
        "Unable to detect {username_attribute} placeholder in users_filter, "
        f"your configuration is broken. Please review configuration options listed at {LDAP_DOCS_URL}"
    ),
    "{input}": (
        "Unable to detect {input} placeholder in users_filter, "
        f"your configuration might be broken. Please review configuration options listed at {LDAP_DOCS_URL}"
    ),
}


def check_filter(
    value: str,
    kind: str,
    sink: ErrorSink,
    placeholders: Iterable[tuple[str, str]] = (),
) -> None:
    """Check a search filter for enclosing parenthesis and required placeholders.

    The filter itself is never modified.

    Args:
        value: Filter as configured
        kind: Human name of the filter, e.g. ``users`` or ``groups``
        sink: Error sink receiving diagnostics
        placeholders: Pairs of (token, message) appended when token is absent
    """
    if not (value.startswith("(") and value.endswith(")")):
        sink.append(
            f"The {kind} filter should contain enclosing parenthesis. "
            f"For instance {value} should be ({value})"
        )

    for token, message in placeholders:
        if token not in value:
            sink.append(message)


def check_users_filter(value: str, sink: ErrorSink) -> None:
    """Check a users filter, including its username and input placeholders."""
    check_filter(value, "users", sink, USERS_FILTER_PLACEHOLDERS.items())


def check_groups_filter(value: str, sink: ErrorSink) -> None:
    """Check a groups filter for enclosing parentheses."""
    check_filter(value, "groups", sink)
