"""Translation of domain errors into HTTP errors."""

from fastapi import HTTPException, status

from core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    TeamBuilderError,
    UpstreamFormatError,
)

_STATUS_BY_ERROR = [
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UpstreamFormatError, status.HTTP_502_BAD_GATEWAY),
]


def to_http_exception(exc: TeamBuilderError) -> HTTPException:
    """Map a domain error to an HTTPException with a presentable detail."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            detail = str(exc)
            if isinstance(exc, UpstreamFormatError):
                detail = "AI concierge returned an invalid response"
            return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )
