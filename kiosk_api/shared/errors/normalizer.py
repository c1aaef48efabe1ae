"""
Client-safe error formatting.

``parse_error`` turns whatever was raised (or a list of such values) into
text that can be returned to a client. The full detail is logged under a
random correlation code, and the same code is embedded in the returned
text so an operator can find it.

Database errors are never rendered from the driver message: each
``DatabaseErrorKind`` has a fixed safe text.
"""

import logging
import secrets
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from kiosk_api.shared.errors.types import (
    DatabaseError,
    DatabaseErrorKind,
    FeatureNotEnabledError,
)

logger = logging.getLogger(__name__)

DATABASE_ERROR_TEXT = {
    DatabaseErrorKind.CONNECTIVITY: "Unable to connect to the database",
    DatabaseErrorKind.POOL_EXHAUSTED: "The database is busy, please try again later",
    DatabaseErrorKind.CONSTRAINT: "The data conflicts with an existing record",
    DatabaseErrorKind.QUERY: "The database could not process the request",
}

UNKNOWN_ERROR_TEXT = "Unknown error"


@dataclass(frozen=True)
class NormalizedError:
    """Result of ``parse_error``.

    Attributes:
        code: Correlation code (8 hex chars), None when not requested.
        errors: One string per input error. A list when the input was an
            aggregate, a single string otherwise.
    """

    code: str | None
    errors: str | list[str]


def new_correlation_code() -> str:
    """Return 8 lowercase hex characters from a cryptographic source."""
    return secrets.token_hex(4)


def parse_error(err: Any, with_code: bool = True) -> NormalizedError:
    """Convert an error into text that is safe to return to a client.

    Args:
        err: An exception, a string, a mapping with a ``message`` key, or a
            list/tuple/exception group of those.
        with_code: Prefix every message with ``Error #<code>: ``.

    Returns:
        The correlation code and the formatted message(s).
    """
    code = new_correlation_code() if with_code else None
    _log_error(code, err)

    if isinstance(err, BaseExceptionGroup):
        errors: str | list[str] = [format_message(code, item) for item in err.exceptions]
    elif isinstance(err, (list, tuple)):
        errors = [format_message(code, item) for item in err]
    else:
        errors = format_message(code, err)
    return NormalizedError(code=code, errors=errors)


def format_message(code: str | None, message: Any) -> str:
    """Render one error and apply punctuation, code and header rules."""
    text = render_error(message)
    if not (text.endswith(".") or text.endswith("?")):
        text = f"{text}."
    if code is not None:
        text = f"Error #{code}: {text}"
    if not text.startswith("Error"):
        text = f"Error: {text}"
    return text


def render_error(message: Any) -> str:
    """Return a human rendering of ``message``. Never raises."""
    if isinstance(message, DatabaseError):
        return DATABASE_ERROR_TEXT.get(message.kind, DATABASE_ERROR_TEXT[DatabaseErrorKind.QUERY])
    if message is None:
        return UNKNOWN_ERROR_TEXT
    if isinstance(message, str):
        return message
    if isinstance(message, BaseException):
        return _safe_str(message) or type(message).__name__
    if isinstance(message, Mapping) and "message" in message:
        return render_error(message["message"])
    return _safe_str(message) or UNKNOWN_ERROR_TEXT


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


def _log_error(code: str | None, err: Any) -> None:
    label = code or "no code"
    if isinstance(err, (list, tuple, BaseExceptionGroup)):
        items = err.exceptions if isinstance(err, BaseExceptionGroup) else err
        # no stack traces for bulk failures
        logger.error("<Error> %s %s", label, [_safe_str(item) for item in items])
    elif isinstance(err, FeatureNotEnabledError):
        logger.warning("<Error> %s %s", label, err)
    elif isinstance(err, BaseException):
        logger.error("<Error> %s %r", label, err, exc_info=err)
    else:
        logger.error("<Error> %s %r", label, err)
