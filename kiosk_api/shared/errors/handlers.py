"""
Error stage of the response envelope.

Maps anything raised below a mounted route to a client response.
No stack traces or internal details are exposed to clients: every
message goes through ``parse_error`` and carries a correlation code
that points at the full detail in the server logs.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from starlette.responses import Response

from kiosk_api.shared.envelope.writer import ResponseWriter
from kiosk_api.shared.errors.codes import DEFAULT_ERROR_TABLE, ErrorTable
from kiosk_api.shared.errors.normalizer import NormalizedError, parse_error
from kiosk_api.shared.errors.types import ApplicationError, DatabaseError

logger = logging.getLogger(__name__)

HTTP_200 = 200
HTTP_500 = 500

DATABASE_FAILURE_TEXT = "Connection Database Fail"


def get_error_table(request: Request) -> ErrorTable:
    """Return the error table installed on the application."""
    return getattr(request.app.state, "error_table", DEFAULT_ERROR_TABLE)


def simplify_error(request: Request, err: Any) -> NormalizedError:
    """Normalize ``err`` and log which request it belongs to."""
    normalized = parse_error(err)
    context = getattr(request.state, "context", None)
    logger.info(
        "<Request> code=%s url=%s user=%s",
        normalized.code,
        request.url,
        getattr(context, "username", None),
    )
    return normalized


def error_envelope(request: Request, err: Exception) -> tuple[int, dict[str, Any]]:
    """Return the status and body answering a raised ``err``.

    A recognized ``ApplicationError`` code answers with its table message at
    the error's status (200 by default). Anything else is a 500 whose body
    has only a ``message``.
    """
    table = get_error_table(request)
    entry = table.get(err.code) if isinstance(err, ApplicationError) and err.code else None

    if entry is not None:
        normalized = simplify_error(request, entry.message)
        status = err.status or HTTP_200
        return status, {"errorCode": entry.error_code, "message": normalized.errors}

    if isinstance(err, DatabaseError):
        normalized = simplify_error(request, DATABASE_FAILURE_TEXT)
        # driver detail under the same code the client sees
        logger.error(
            "<Error> %s Database failure on %s", normalized.code, request.url, exc_info=err
        )
    else:
        normalized = simplify_error(request, err)
    return HTTP_500, {"message": normalized.errors}


def write_error(request: Request, err: Exception, writer: ResponseWriter) -> Response:
    """Run the error stage and write its response."""
    status, body = error_envelope(request, err)
    return writer.json(status, body)


def register_error_handlers(app: FastAPI) -> None:
    """Register the error stage for errors raised outside mounted route groups.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(ApplicationError)
    async def handle_application_error(request: Request, exc: ApplicationError) -> Response:
        """Answer application errors with the envelope."""
        return write_error(request, exc, ResponseWriter())

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> Response:
        """Catch-all for unexpected errors. Never exposes internals."""
        return write_error(request, exc, ResponseWriter())
