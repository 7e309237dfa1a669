"""Users API routes — CRUD plus self-service profile."""

from typing import List

from fastapi import APIRouter, Depends, status

from pinifast.application.services.user_service import UserService
from pinifast.core.exceptions import (
    EntityNotFoundException,
    ForbiddenException,
    ValidationException,
)
from pinifast.domain.schemas.auth import CurrentUser
from pinifast.domain.schemas.common import ApiResponse, ok
from pinifast.domain.schemas.user import UserCreate, UserRead, UserUpdate
from pinifast.interfaces.api.deps import get_current_user, require_admin
from pinifast.interfaces.deps import get_user_service

router = APIRouter(prefix="/api/users", tags=["Users"])


def _strip_activation(data: UserUpdate, user: CurrentUser) -> UserUpdate:
    """Only admins may toggle ``is_active``."""
    if user.is_admin or "is_active" not in data.model_fields_set:
        return data
    changes = data.model_dump(exclude_unset=True, exclude={"is_active"})
    if not changes:
        raise ValidationException("No updatable fields provided")
    return UserUpdate(**changes)


# /me/profile must be declared before /{user_id}
@router.get("/me/profile", response_model=ApiResponse[UserRead])
def get_profile(
    user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    profile = service.find_by_id(user.id)
    if profile is None:
        raise EntityNotFoundException("Profile not found")
    return ok(service.to_public(profile), "Profile retrieved successfully")


@router.put("/me/profile", response_model=ApiResponse[UserRead])
def update_profile(
    body: UserUpdate,
    user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    updated = service.update(user.id, _strip_activation(body, user))
    return ok(service.to_public(updated), "Profile updated successfully")


@router.get("", response_model=ApiResponse[List[UserRead]])
def list_users(service: UserService = Depends(get_user_service)):
    users = [service.to_public(u) for u in service.find_all()]
    return ok(users, "Users retrieved successfully")


@router.get("/{user_id}", response_model=ApiResponse[UserRead])
def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    return ok(service.to_public(service.get_by_id(user_id)), "User retrieved successfully")


@router.post("", response_model=ApiResponse[UserRead], status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    admin: CurrentUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    user = service.create(body)
    return ok(service.to_public(user), "User created successfully", status.HTTP_201_CREATED)


@router.put("/{user_id}", response_model=ApiResponse[UserRead])
def update_user(
    user_id: str,
    body: UserUpdate,
    user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    if user.id != user_id and not user.is_admin:
        raise ForbiddenException("Forbidden: You can only update your own profile")

    updated = service.update(user_id, _strip_activation(body, user))
    return ok(service.to_public(updated), "User updated successfully")


@router.delete("/{user_id}", response_model=ApiResponse[None])
def delete_user(
    user_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    if admin.id == user_id:
        raise ValidationException("You cannot delete your own account")

    service.delete(user_id)
    return ok(message="User deleted successfully")
