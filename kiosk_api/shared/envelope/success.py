"""
Success stage of the response envelope.

Runs after a handler returned normally and turns its request context
into the response body.
"""

from starlette.requests import Request
from starlette.responses import Response

from kiosk_api.shared.envelope.context import RequestContext
from kiosk_api.shared.envelope.writer import ResponseWriter
from kiosk_api.shared.errors.codes import SUCCESS
from kiosk_api.shared.errors.handlers import get_error_table, simplify_error

HTTP_200 = 200
HTTP_404 = 404


def write_success(request: Request, context: RequestContext, writer: ResponseWriter) -> Response:
    """Write the envelope for a handler that completed without raising.

    - No answer and no status: the handler produced nothing, 404.
    - ``error_code`` with an explicit ``message`` (or a code missing from
      the error table): the message is sent verbatim.
    - ``error_code`` found in the table: its message, normalized.
    - Otherwise ``{"errorCode": "0", "message": "Success"}``.
    """
    if not context.has_answer and context.status is None:
        return writer.status_only(HTTP_404)

    status = context.status or HTTP_200

    if context.error_code:
        entry = get_error_table(request).get(context.error_code)
        if context.message or entry is None:
            message = context.message
        else:
            message = simplify_error(request, entry.message).errors
        body = {"errorCode": context.error_code, "message": message, "data": context.data}
    else:
        body = {"errorCode": SUCCESS.error_code, "message": SUCCESS.message, "data": context.data}

    return writer.json(status, body)
