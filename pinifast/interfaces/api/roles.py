"""Roles API routes — admin-only role management and assignment."""

from typing import List

from fastapi import APIRouter, Depends, status

from pinifast.application.services.role_service import RoleService
from pinifast.core.exceptions import EntityNotFoundException
from pinifast.domain.schemas.auth import CurrentUser
from pinifast.domain.schemas.common import ApiResponse, ok
from pinifast.domain.schemas.role import (
    RoleAssignmentRead,
    RoleAssignmentRequest,
    RoleCreate,
    RoleRead,
    RoleUpdate,
    UserWithRoles,
)
from pinifast.domain.schemas.user import UserRead
from pinifast.interfaces.api.deps import require_admin
from pinifast.interfaces.deps import get_role_service

router = APIRouter(prefix="/api", tags=["Roles"], dependencies=[Depends(require_admin)])


@router.get("/roles", response_model=ApiResponse[List[RoleRead]])
def list_roles(service: RoleService = Depends(get_role_service)):
    roles = [RoleRead.model_validate(r) for r in service.find_all_roles()]
    return ok(roles, "Roles retrieved successfully")


@router.post("/roles", response_model=ApiResponse[RoleRead], status_code=status.HTTP_201_CREATED)
def create_role(body: RoleCreate, service: RoleService = Depends(get_role_service)):
    role = service.create_role(body.name, body.description)
    return ok(RoleRead.model_validate(role), "Role created successfully", status.HTTP_201_CREATED)


@router.post("/roles/assign", response_model=ApiResponse[RoleAssignmentRead], status_code=status.HTTP_201_CREATED)
def assign_role(
    body: RoleAssignmentRequest,
    admin: CurrentUser = Depends(require_admin),
    service: RoleService = Depends(get_role_service),
):
    assignment = service.assign_role_to_user(body.user_id, body.role_id, admin.id)
    return ok(assignment, "Role assigned successfully", status.HTTP_201_CREATED)


@router.post("/roles/remove", response_model=ApiResponse[None])
def remove_role(body: RoleAssignmentRequest, service: RoleService = Depends(get_role_service)):
    service.remove_role_from_user(body.user_id, body.role_id)
    return ok(message="Role removed successfully")


@router.get("/roles/{role_id}", response_model=ApiResponse[RoleRead])
def get_role(role_id: str, service: RoleService = Depends(get_role_service)):
    return ok(RoleRead.model_validate(service.get_role_by_id(role_id)), "Role retrieved successfully")


@router.put("/roles/{role_id}", response_model=ApiResponse[RoleRead])
def update_role(role_id: str, body: RoleUpdate, service: RoleService = Depends(get_role_service)):
    role = service.update_role(role_id, body.name, body.description)
    return ok(RoleRead.model_validate(role), "Role updated successfully")


@router.delete("/roles/{role_id}", response_model=ApiResponse[None])
def delete_role(role_id: str, service: RoleService = Depends(get_role_service)):
    service.delete_role(role_id)
    return ok(message="Role deleted successfully")


@router.get("/roles/{role_id}/users", response_model=ApiResponse[List[UserRead]])
def users_by_role(role_id: str, service: RoleService = Depends(get_role_service)):
    users = [UserRead.model_validate(u) for u in service.get_users_by_role(role_id)]
    return ok(users, "Users with role retrieved successfully")


@router.get("/users/{user_id}/roles", response_model=ApiResponse[UserWithRoles])
def user_roles(user_id: str, service: RoleService = Depends(get_role_service)):
    user = service.get_user_with_roles(user_id)
    if user is None:
        raise EntityNotFoundException("User not found")
    return ok(user, "User roles retrieved successfully")
