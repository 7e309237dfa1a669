"""Auth API routes — login, register, refresh, logout, me."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from pinifast.application.services.auth_service import AuthService
from pinifast.application.services.role_service import RoleService
from pinifast.core.exceptions import EntityNotFoundException, UnauthorizedException
from pinifast.domain.schemas.auth import AuthResponse, CurrentUser, LoginRequest, RegisterRequest
from pinifast.domain.schemas.common import ApiResponse, ok
from pinifast.domain.schemas.role import UserWithRoles
from pinifast.interfaces.api.deps import (
    authorization_header,
    extract_token,
    get_current_user,
    get_optional_user,
)
from pinifast.interfaces.deps import get_auth_service, get_role_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=ApiResponse[AuthResponse])
def login(body: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    return ok(auth_service.login(body), "Login successful")


@router.post("/register", response_model=ApiResponse[AuthResponse], status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    requesting_user: Optional[CurrentUser] = Depends(get_optional_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    result = auth_service.register(body, requesting_user)
    return ok(result, "Registration successful", status.HTTP_201_CREATED)


@router.post("/refresh", response_model=ApiResponse[AuthResponse])
def refresh(
    authorization: Optional[str] = Depends(authorization_header),
    auth_service: AuthService = Depends(get_auth_service),
):
    token = extract_token(authorization)
    if token is None:
        raise UnauthorizedException("Authorization header required")
    return ok(auth_service.refresh_token(token), "Token refreshed successfully")


@router.post("/logout", response_model=ApiResponse[None])
def logout(
    user: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    auth_service.logout(user)
    return ok(message="Logout successful")


@router.get("/me", response_model=ApiResponse[UserWithRoles])
def get_me(
    user: CurrentUser = Depends(get_current_user),
    role_service: RoleService = Depends(get_role_service),
):
    profile = role_service.get_user_with_roles(user.id)
    if profile is None:
        raise EntityNotFoundException("User not found")
    return ok(profile, "Profile retrieved successfully")
