"""
Request guards attached to router groups.

- ``require_token``: the access-token header must be present.
- ``require_csrf``: unsafe methods must echo the CSRF cookie in a header
  (double-submit check).

Failures raise ``InvalidSessionError`` so the error stage answers with
error code "1".
"""

import logging
import secrets

from fastapi import Depends
from starlette.requests import Request

from kiosk_api.core.config import ConfigStore
from kiosk_api.shared.envelope.context import RequestContext, get_request_context
from kiosk_api.shared.errors.types import InvalidSessionError
from kiosk_api.shared.utils import parse_jwt

logger = logging.getLogger(__name__)

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
HTTP_403 = 403


def get_configuration_store(request: Request) -> ConfigStore:
    """FastAPI dependency returning the configuration the app was built with."""
    return request.app.state.configuration


def require_token(
    request: Request,
    context: RequestContext = Depends(get_request_context),
    configuration: ConfigStore = Depends(get_configuration_store),
) -> str:
    """Reject requests without an access token.

    The token payload is decoded (unverified) only to record the caller's
    name in the logs.
    """
    header = configuration.get("auth.token.key", "x-access-token")
    token = request.headers.get(header)
    if not token:
        raise InvalidSessionError(f"Missing {header} header")
    try:
        claims = parse_jwt(token)
    except ValueError as exc:
        raise InvalidSessionError("Malformed access token") from exc
    context.username = claims.get("username") or claims.get("sub")
    return token


def require_csrf(
    request: Request,
    configuration: ConfigStore = Depends(get_configuration_store),
) -> None:
    """Reject unsafe requests whose CSRF header does not match the cookie."""
    if request.method in SAFE_METHODS:
        return
    cookie = request.cookies.get(configuration.get("auth.csrf.cookie", "csrf_token"))
    header = request.headers.get(configuration.get("auth.csrf.header", "x-csrf-token"))
    if not cookie or not header or not secrets.compare_digest(cookie, header):
        logger.warning("CSRF check failed for %s %s", request.method, request.url.path)
        raise InvalidSessionError("CSRF token mismatch", status=HTTP_403)
