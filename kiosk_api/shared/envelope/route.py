"""
Route class wrapping every mounted endpoint with the envelope.

Order per request: request log, handler (with its guards), success or
error stage, response log. The handler's own return value is discarded;
the response always comes from the request context or the raised error.
"""

import logging
from collections.abc import Callable, Coroutine
from typing import Any

from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import Response

from kiosk_api.shared.envelope.context import RequestContext
from kiosk_api.shared.envelope.success import write_success
from kiosk_api.shared.envelope.writer import ResponseAlreadyWrittenError, ResponseWriter
from kiosk_api.shared.errors.handlers import write_error
from kiosk_api.shared.utils import StopWatch

logger = logging.getLogger(__name__)

# Left to FastAPI's own handlers.
PASSTHROUGH_ERRORS = (HTTPException, RequestValidationError, ResponseAlreadyWrittenError)


def log_request(request: Request) -> None:
    client = request.client.host if request.client else "unknown"
    logger.info("--> %s %s from %s", request.method, request.url.path, client)


def log_response(request: Request, response: Response, stop_watch: StopWatch) -> None:
    logger.info(
        "<-- %s %s %d in %.3fs",
        request.method,
        request.url.path,
        response.status_code,
        stop_watch.duration_seconds,
    )


class EnvelopeRoute(APIRoute):
    """APIRoute whose handler always answers with the response envelope."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handle = super().get_route_handler()

        async def envelope_handler(request: Request) -> Response:
            stop_watch = StopWatch()
            log_request(request)

            context = RequestContext()
            request.state.context = context
            writer = ResponseWriter()

            try:
                await handle(request)
            except PASSTHROUGH_ERRORS:
                raise
            except Exception as exc:
                response = write_error(request, exc, writer)
            else:
                response = write_success(request, context, writer)

            log_response(request, response, stop_watch)
            return response

        return envelope_handler
