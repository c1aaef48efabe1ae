"""
Small helpers shared across layers.
"""

import base64
import json
import time
from typing import Any


class StopWatch:
    """Measures elapsed wall time from construction or the last ``start``."""

    def __init__(self) -> None:
        self._started = time.monotonic()
        self.start_time = time.time()

    def start(self) -> None:
        self._started = time.monotonic()
        self.start_time = time.time()

    @property
    def duration_seconds(self) -> float:
        return time.monotonic() - self._started

    @property
    def duration(self) -> str:
        """Elapsed time as ``HH:MM:SS``."""
        total = int(self.duration_seconds)
        hours, remainder = divmod(total, 3600)
        minutes, seconds = divmod(remainder, 60)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def to_boolean(text: Any, default: bool | None = None) -> bool | None:
    """Convert ``"true"``/``"false"`` (any case, padded) to a bool.

    Anything else returns ``default``.
    """
    normalized = str(text).strip().lower() if text is not None else ""
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return default


def parse_jwt(token: str) -> dict[str, Any]:
    """Decode the payload of a JWT without verifying its signature.

    Only meant for log traceability; never use the result for
    authorization decisions.

    Raises:
        ValueError: If the token is not a three-part JWT with a JSON payload.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise ValueError("Token is not a JWT")
    payload = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        decoded = json.loads(base64.urlsafe_b64decode(payload))
    except ValueError as exc:
        raise ValueError("Token payload is not valid JSON") from exc
    if not isinstance(decoded, dict):
        raise ValueError("Token payload is not an object")
    return decoded
