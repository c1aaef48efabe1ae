"""
Data Transfer Objects for the role application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import datetime

from kiosk_api.domain.role.entities import Role


@dataclass(frozen=True)
class RenameRoleCommand:
    """Input DTO for renaming a role.

    Attributes:
        role_id: Id of the role to rename.
        role_name: New display name.
    """

    role_id: int
    role_name: str


@dataclass(frozen=True)
class RoleResult:
    """Output DTO for a role."""

    id: int
    role_code: int
    role_name: str
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, role: Role) -> "RoleResult":
        return cls(
            id=role.id,
            role_code=role.role_code,
            role_name=role.role_name,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )
