"""
Use case: Rename a role.

Input: RenameRoleCommand (role_id, role_name)
Output: RoleResult of the updated role
Side effects: Updates the role row.
Failure cases: RoleNotFoundError, EmptyRoleNameError, DatabaseError.
"""

import logging

from kiosk_api.application.role.dtos import RenameRoleCommand, RoleResult
from kiosk_api.domain.role.errors import EmptyRoleNameError, RoleNotFoundError
from kiosk_api.domain.role.ports import RoleRepository

logger = logging.getLogger(__name__)


class RenameRoleUseCase:
    """Validates and applies a role rename.

    The existence check runs before the name check, so renaming a
    missing role to a blank name reports the missing role.
    """

    def __init__(self, role_repo: RoleRepository) -> None:
        self._role_repo = role_repo

    def execute(self, command: RenameRoleCommand) -> RoleResult:
        """Run the rename use case.

        Args:
            command: Role id and the new name.

        Returns:
            The role as stored after the update.

        Raises:
            RoleNotFoundError: No role has ``command.role_id``.
            EmptyRoleNameError: ``command.role_name`` is blank.
        """
        logger.info("Renaming role id=%s to %r", command.role_id, command.role_name)

        if self._role_repo.get_by_id(command.role_id) is None:
            raise RoleNotFoundError(command.role_id)

        if not (command.role_name or "").strip():
            raise EmptyRoleNameError()

        # stored as sent
        updated = self._role_repo.rename(command.role_id, command.role_name)
        if updated is None:
            # deleted between the check and the update
            raise RoleNotFoundError(command.role_id)
        return RoleResult.from_entity(updated)
