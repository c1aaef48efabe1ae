"""
Domain-specific errors for the role bounded context.

Each error carries the business error code sent to clients.
These codes are not part of the shared error table, so the interface
layer always sends them with an explicit message.
No framework imports allowed.
"""

ROLE_NOT_FOUND = "001001"
ROLE_NAME_EMPTY = "001002"


class RoleDomainError(Exception):
    """Base error for all role domain errors."""

    code: str = ""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class RoleNotFoundError(RoleDomainError):
    """Raised when no role has the requested id."""

    code = ROLE_NOT_FOUND

    def __init__(self, role_id: int) -> None:
        super().__init__(f"Role {role_id} not found.")
        self.role_id = role_id


class EmptyRoleNameError(RoleDomainError):
    """Raised when a role would be renamed to a blank name."""

    code = ROLE_NAME_EMPTY

    def __init__(self) -> None:
        super().__init__("Role name must not be empty.")
