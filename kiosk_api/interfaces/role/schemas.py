"""
Pydantic schemas for role API request/response validation.

These schemas define the API contract of the role resource.
No business logic belongs here.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from kiosk_api.application.role.dtos import RoleResult


class UpdateRoleRequest(BaseModel):
    """Request schema for renaming a role.

    Attributes:
        role_name: New display name. Blank names are rejected by the use
            case with a business error, not by validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    role_name: str = Field(default="", alias="roleName", max_length=255)


class RoleItem(BaseModel):
    """A role as returned in the envelope ``data``."""

    id: int
    role_code: int
    role_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_result(cls, result: RoleResult) -> "RoleItem":
        return cls(
            id=result.id,
            role_code=result.role_code,
            role_name=result.role_name,
            created_at=result.created_at,
            updated_at=result.updated_at,
        )
