"""Error sink shared by the configuration validators."""

from collections.abc import Iterator


class ErrorSink:
    """Ordered, append-only log of configuration diagnostics.

    A sink is shared by every check run during one validation session and is
    never cleared by the validators themselves, so messages from successive
    calls accumulate. The number of messages is the caller's success signal:
    an empty sink means the configuration was accepted.
    """

    def __init__(self) -> None:
        self._errors: list[str] = []

    def append(self, message: str) -> None:
        """Record a diagnostic message."""
        self._errors.append(message)

    def count(self) -> int:
        """Return the number of recorded messages."""
        return len(self._errors)

    def has_errors(self) -> bool:
        """Return True when at least one error has been recorded."""
        return bool(self._errors)

    @property
    def errors(self) -> list[str]:
        """Messages recorded so far, oldest first."""
        return list(self._errors)

    def clear(self) -> None:
        """Drop all recorded messages. Only ever called by the owner of the sink."""
        self._errors.clear()

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._errors))
