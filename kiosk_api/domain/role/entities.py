"""
Domain entities for the role bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Role:
    """A user role.

    Attributes:
        id: Surrogate primary key.
        role_code: Business code users reference their role by.
        role_name: Display name.
        created_at: Row creation time.
        updated_at: Last modification time.
    """

    id: int
    role_code: int
    role_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
