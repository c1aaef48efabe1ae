"""
Per-request scratch state filled by route handlers.

Handlers never build responses themselves. They set ``answer`` (and
optionally ``status``), or flag a business error with ``error_code`` and
``message``; the success stage reads the context exactly once.
"""

from dataclasses import dataclass
from typing import Any

from starlette.requests import Request


class _Unset:
    """Marker for an answer that was never set. ``None`` is a valid answer."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class RequestContext:
    """Request-lifetime fields consumed by the envelope.

    Attributes:
        answer: Payload returned as ``data``.
        error_code: Business error code; keys into the error table.
        message: Explicit client message for ``error_code``.
        status: HTTP status override, 200 when left unset.
        username: Caller identity, used for log traceability only.
    """

    answer: Any = UNSET
    error_code: str | None = None
    message: str | None = None
    status: int | None = None
    username: str | None = None

    @property
    def has_answer(self) -> bool:
        return self.answer is not UNSET

    @property
    def data(self) -> Any:
        """The answer, or None when it was never set."""
        return None if self.answer is UNSET else self.answer


def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency returning the context attached to ``request``."""
    context = getattr(request.state, "context", None)
    if context is None:
        context = RequestContext()
        request.state.context = context
    return context
