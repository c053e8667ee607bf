"""LDAP connection URL normalization."""

import re
from urllib.parse import SplitResult, urlsplit, urlunsplit

import structlog

from ..sink import ErrorSink

logger = structlog.get_logger()

LDAP_DEFAULT_PORTS = {"ldap": 389, "ldaps": 636}

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")

UNKNOWN_SCHEME_ERROR = "Unknown scheme for ldap url, should be ldap:// or ldaps://"
PARSE_ERROR = (
    "Unable to parse URL to ldap server. The scheme is probably missing: ldap:// or ldaps://"
)


def _split_url(raw: str) -> SplitResult:
    """Split a URL, raising ValueError on input that is not a URL.

    Without a scheme, a colon in the first path segment (``host:port``) makes
    the input ambiguous, so it is rejected rather than guessed at.
    urlsplit drops tabs and newlines silently, so control characters and
    whitespace are rejected up front.
    """
    if any(ord(c) < 0x21 or c == "\x7f" for c in raw):
        raise ValueError("invalid control character in URL")

    if not _SCHEME_RE.match(raw) and ":" in raw.split("/", 1)[0]:
        raise ValueError("first path segment in URL cannot contain colon")

    parts = urlsplit(raw)
    if parts.netloc:
        # Accessing the port validates it
        parts.port  # noqa: B018
    return parts


def validate_ldap_url(raw: str, sink: ErrorSink) -> str:
    """Normalize an LDAP URL, adding the default port of its scheme.

    Normalizing an already normalized URL returns it unchanged.

    Args:
        raw: URL as configured
        sink: Error sink receiving diagnostics

    Returns:
        The normalized URL, or an empty string when the URL is rejected
    """
    try:
        parts = _split_url(raw)
    except ValueError as e:
        logger.debug("Unable to parse LDAP URL", url=raw, error=str(e))
        sink.append(PARSE_ERROR)
        return ""

    if parts.scheme not in LDAP_DEFAULT_PORTS:
        sink.append(UNKNOWN_SCHEME_ERROR)
        return ""

    if not parts.hostname:
        sink.append(PARSE_ERROR)
        return ""

    netloc = parts.netloc
    if parts.port is None:
        netloc = f"{netloc.rstrip(':')}:{LDAP_DEFAULT_PORTS[parts.scheme]}"
        logger.debug("Applied default LDAP port", url=raw, netloc=netloc)

    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))
