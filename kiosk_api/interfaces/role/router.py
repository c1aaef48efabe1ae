"""
FastAPI routers for the role bounded context.

All routes delegate to use cases and fill the request context.
The response envelope is added by the router mount, not here.
"""

from fastapi import APIRouter, Depends, Path

from kiosk_api.application.role.dtos import RenameRoleCommand
from kiosk_api.application.role.list_roles import ListRolesUseCase
from kiosk_api.application.role.rename_role import RenameRoleUseCase
from kiosk_api.domain.role.errors import RoleDomainError
from kiosk_api.interfaces.role.dependencies import (
    get_list_roles_use_case,
    get_rename_role_use_case,
)
from kiosk_api.interfaces.role.schemas import RoleItem, UpdateRoleRequest
from kiosk_api.interfaces.routing import RouterKind
from kiosk_api.shared.envelope.context import RequestContext, get_request_context

router = APIRouter(tags=["role"])  # not protected from csrf
csrf_router = APIRouter(tags=["role"])  # protected from csrf
token_router = APIRouter(tags=["role"])  # token only

_ROUTERS = {
    RouterKind.TOKEN_ONLY: token_router,
    RouterKind.NO_CSRF: router,
    RouterKind.WITH_CSRF: csrf_router,
}


def setup(kind: RouterKind) -> APIRouter:
    """Return the router serving ``kind``."""
    return _ROUTERS[kind]


@router.get(
    "/all",
    summary="List roles",
    description="Return every role ordered by id.",
)
def list_roles(
    context: RequestContext = Depends(get_request_context),
    use_case: ListRolesUseCase = Depends(get_list_roles_use_case),
) -> None:
    """List all roles."""
    context.answer = [RoleItem.from_result(role) for role in use_case.execute()]


@router.post(
    "/update/{roleId}",
    summary="Rename a role",
    description="Rename a role. Unknown ids and blank names answer with a business error code.",
)
def update_role(
    payload: UpdateRoleRequest,
    role_id: int = Path(..., alias="roleId"),
    context: RequestContext = Depends(get_request_context),
    use_case: RenameRoleUseCase = Depends(get_rename_role_use_case),
) -> None:
    """Rename the role ``roleId`` to ``roleName``."""
    command = RenameRoleCommand(role_id=role_id, role_name=payload.role_name)
    try:
        result = use_case.execute(command)
    except RoleDomainError as exc:
        context.error_code = exc.code
        context.message = exc.message
        context.answer = None
        return
    context.answer = RoleItem.from_result(result)
