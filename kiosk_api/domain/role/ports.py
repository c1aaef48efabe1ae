"""
Port interfaces (ABCs) for the role bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from kiosk_api.domain.role.entities import Role


class RoleRepository(ABC):
    """Port for reading and updating roles."""

    @abstractmethod
    def list_all(self) -> list[Role]:
        """Return every role ordered by id."""
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, role_id: int) -> Optional[Role]:
        """Return the role with ``role_id``, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def rename(self, role_id: int, role_name: str) -> Optional[Role]:
        """Set the name of a role and return the updated role.

        Returns:
            The updated role, or None if ``role_id`` does not exist.
        """
        raise NotImplementedError
