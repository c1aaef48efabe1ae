"""
Error types shared by every layer.

The classification is closed: handlers either fill the request context
with a business error code, or raise one of these (or anything else, which
is treated as an unclassified failure by the error stage).
No framework imports allowed.
"""

from enum import Enum


class ApplicationError(Exception):
    """Base error carrying an error-table code and an HTTP status.

    Attributes:
        message: Server-side description.
        code: Key into the error table, or None when unclassified.
        status: HTTP status for the response, None means 200.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status: int | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status = status
        super().__init__(self.message)


class InvalidSessionError(ApplicationError):
    """Raised when a request carries no usable session or token."""

    def __init__(self, message: str = "Invalid Session", status: int | None = None) -> None:
        super().__init__(message, code="1", status=status)


class FeatureNotEnabledError(ApplicationError):
    """Raised by code paths that are switched off. Expected, never noisy."""

    def __init__(self, feature: str) -> None:
        super().__init__(f"Feature not enabled: {feature}")
        self.feature = feature


class DatabaseErrorKind(Enum):
    """What went wrong while talking to the database."""

    CONNECTIVITY = "connectivity"
    POOL_EXHAUSTED = "pool_exhausted"
    CONSTRAINT = "constraint"
    QUERY = "query"


class DatabaseError(ApplicationError):
    """Raised by the database layer. The driver text stays server-side."""

    def __init__(self, kind: DatabaseErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
