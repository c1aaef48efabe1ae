"""
Use case: List every role.

Input: none
Output: list[RoleResult]
Side effects: None.
Failure cases: DatabaseError from the repository.
"""

import logging

from kiosk_api.application.role.dtos import RoleResult
from kiosk_api.domain.role.ports import RoleRepository

logger = logging.getLogger(__name__)


class ListRolesUseCase:
    """Returns all roles through the RoleRepository port."""

    def __init__(self, role_repo: RoleRepository) -> None:
        self._role_repo = role_repo

    def execute(self) -> list[RoleResult]:
        roles = self._role_repo.list_all()
        logger.info("Listed %d roles.", len(roles))
        return [RoleResult.from_entity(role) for role in roles]
