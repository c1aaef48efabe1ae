"""
Tests for the role application layer (use cases).

Tests use cases with mocked ports. No real infrastructure needed.
Each test verifies orchestration logic, not persistence.
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from kiosk_api.application.role.dtos import RenameRoleCommand, RoleResult
from kiosk_api.application.role.list_roles import ListRolesUseCase
from kiosk_api.application.role.rename_role import RenameRoleUseCase
from kiosk_api.domain.role.entities import Role
from kiosk_api.domain.role.errors import (
    ROLE_NAME_EMPTY,
    ROLE_NOT_FOUND,
    EmptyRoleNameError,
    RoleNotFoundError,
)
from kiosk_api.domain.role.ports import RoleRepository

STAMP = datetime(2024, 5, 1, 8, 30)


def _role(role_id: int = 1, name: str = "admin") -> Role:
    return Role(id=role_id, role_code=role_id * 100, role_name=name, created_at=STAMP, updated_at=STAMP)


@pytest.fixture
def role_repo() -> MagicMock:
    return MagicMock(spec=RoleRepository)


class TestListRolesUseCase:
    """Tests for the ListRolesUseCase."""

    def test_returns_results_in_repository_order(self, role_repo) -> None:
        role_repo.list_all.return_value = [_role(1, "admin"), _role(2, "staff")]

        results = ListRolesUseCase(role_repo=role_repo).execute()

        assert [r.role_name for r in results] == ["admin", "staff"]
        assert all(isinstance(r, RoleResult) for r in results)


class TestRenameRoleUseCase:
    """Tests for the RenameRoleUseCase."""

    def test_rename_keeps_name_as_sent(self, role_repo) -> None:
        role_repo.get_by_id.return_value = _role()
        role_repo.rename.return_value = _role(name="  owner  ")

        result = RenameRoleUseCase(role_repo=role_repo).execute(
            RenameRoleCommand(role_id=1, role_name="  owner  ")
        )

        role_repo.rename.assert_called_once_with(1, "  owner  ")
        assert result.role_name == "  owner  "

    def test_unknown_role(self, role_repo) -> None:
        role_repo.get_by_id.return_value = None

        with pytest.raises(RoleNotFoundError) as exc_info:
            RenameRoleUseCase(role_repo=role_repo).execute(RenameRoleCommand(5, "x"))

        assert exc_info.value.code == ROLE_NOT_FOUND
        assert exc_info.value.message == "Role 5 not found."
        role_repo.rename.assert_not_called()

    def test_blank_name(self, role_repo) -> None:
        role_repo.get_by_id.return_value = _role()

        with pytest.raises(EmptyRoleNameError) as exc_info:
            RenameRoleUseCase(role_repo=role_repo).execute(RenameRoleCommand(1, " \t "))

        assert exc_info.value.code == ROLE_NAME_EMPTY
        role_repo.rename.assert_not_called()

    def test_existence_checked_before_name(self, role_repo) -> None:
        role_repo.get_by_id.return_value = None

        with pytest.raises(RoleNotFoundError):
            RenameRoleUseCase(role_repo=role_repo).execute(RenameRoleCommand(5, ""))

    def test_role_removed_during_rename(self, role_repo) -> None:
        role_repo.get_by_id.return_value = _role()
        role_repo.rename.return_value = None

        with pytest.raises(RoleNotFoundError):
            RenameRoleUseCase(role_repo=role_repo).execute(RenameRoleCommand(1, "owner"))
