"""Translation of service errors into HTTP errors."""

from fastapi import HTTPException

from umdb.exceptions import (
    NotFound,
    SourceNotConfigured,
    SourceUnavailable,
    UMDBError,
    UnsupportedSource,
    ValidationError,
)

# Most specific first: SourceNotConfigured is a SourceUnavailable
ERROR_STATUS_CODES: list[tuple[type[UMDBError], int]] = [
    (ValidationError, 400),
    (UnsupportedSource, 400),
    (NotFound, 404),
    (SourceNotConfigured, 503),
    (SourceUnavailable, 502),
]


def as_http_error(exc: UMDBError) -> HTTPException:
    """
    Map a service error to an HTTPException with its message as detail.

    Usage:
        try:
            ...
        except UMDBError as e:
            raise as_http_error(e) from e
    """
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
