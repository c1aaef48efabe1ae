"""
Dependency injection for the role bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
"""

from fastapi import Depends
from starlette.requests import Request

from kiosk_api.application.role.list_roles import ListRolesUseCase
from kiosk_api.application.role.rename_role import RenameRoleUseCase
from kiosk_api.infrastructure.database import Database
from kiosk_api.infrastructure.role.role_repository import RoleRepositoryAdapter


def get_database(request: Request) -> Database:
    """Return the database the application was built with."""
    return request.app.state.database


def get_role_repository(database: Database = Depends(get_database)) -> RoleRepositoryAdapter:
    return RoleRepositoryAdapter(session_factory=database.session_factory)


def get_list_roles_use_case(
    role_repo: RoleRepositoryAdapter = Depends(get_role_repository),
) -> ListRolesUseCase:
    """Build ListRolesUseCase with its infrastructure dependencies."""
    return ListRolesUseCase(role_repo=role_repo)


def get_rename_role_use_case(
    role_repo: RoleRepositoryAdapter = Depends(get_role_repository),
) -> RenameRoleUseCase:
    """Build RenameRoleUseCase with its infrastructure dependencies."""
    return RenameRoleUseCase(role_repo=role_repo)
