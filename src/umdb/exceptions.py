"""Error types raised by the matching and reconciliation services."""


class UMDBError(Exception):
    """Base class for all UMDB service errors."""


class SourceUnavailable(UMDBError):
    """
    An external catalog could not be reached or rejected the request.

    Retryable by the caller; the services never retry on their own.
    """

    def __init__(self, source: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.status_code = status_code


class SourceNotConfigured(SourceUnavailable):
    """The API key for an external catalog is missing."""

    def __init__(self, source: str) -> None:
        super().__init__(source, "API key not configured")


class NotFound(UMDBError):
    """A catalog id, movie, or match does not exist."""


class UnsupportedSource(UMDBError):
    """The caller passed a source tag no adapter handles."""

    def __init__(self, source: object) -> None:
        super().__init__(f"Source {source!r} not supported")
        self.source = source


class ValidationError(UMDBError):
    """Required input is missing or malformed."""
