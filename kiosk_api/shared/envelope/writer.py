"""
One-shot response writer.

Each request gets one writer; the first write produces the response and
any later write fails fast instead of emitting a second body.
"""

from http import HTTPStatus
from typing import Any

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse, PlainTextResponse, Response


class ResponseAlreadyWrittenError(RuntimeError):
    """Raised when a second response is written for the same request."""


class ResponseWriter:
    """Builds the single response of a request."""

    def __init__(self) -> None:
        self._response: Response | None = None

    @property
    def written(self) -> bool:
        return self._response is not None

    @property
    def response(self) -> Response | None:
        return self._response

    def json(self, status: int, body: dict[str, Any]) -> Response:
        """Write ``body`` as JSON with ``status``."""
        return self._write(JSONResponse(status_code=status, content=jsonable_encoder(body)))

    def status_only(self, status: int) -> Response:
        """Write a bare status with its reason phrase as the body."""
        return self._write(PlainTextResponse(HTTPStatus(status).phrase, status_code=status))

    def _write(self, response: Response) -> Response:
        if self._response is not None:
            raise ResponseAlreadyWrittenError("A response was already written for this request")
        self._response = response
        return response
