"""
Static error-code table.

Maps the ``errorCode`` sent to clients to its default message.
Codes are unique; lookups scan in order and return the first match.
"""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class DataResponse:
    """One entry of the error table."""

    error_code: str
    message: str


class ErrorTable:
    """Ordered, immutable list of ``DataResponse`` entries."""

    def __init__(self, entries: Iterable[DataResponse]) -> None:
        self._entries = tuple(entries)
        codes = [entry.error_code for entry in self._entries]
        if len(codes) != len(set(codes)):
            raise ValueError("Error codes must be unique")

    def __iter__(self):
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, code: str | None) -> DataResponse | None:
        """Return the entry for ``code`` or None."""
        for entry in self._entries:
            if entry.error_code == code:
                return entry
        return None

    def extend(self, entries: Iterable[DataResponse]) -> "ErrorTable":
        """Return a new table with ``entries`` appended."""
        return ErrorTable((*self._entries, *entries))


SUCCESS = DataResponse(error_code="0", message="Success")
INVALID_SESSION = DataResponse(error_code="1", message="Invalid Session")

DEFAULT_ERROR_TABLE = ErrorTable([SUCCESS, INVALID_SESSION])
