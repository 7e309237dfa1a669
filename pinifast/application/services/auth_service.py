"""Auth service — login, registration and access token lifecycle."""

from typing import List, Optional

import structlog

from pinifast.application.services.role_service import RoleService
from pinifast.application.services.user_service import UserService
from pinifast.config import Settings, get_settings
from pinifast.core.exceptions import (
    ForbiddenException,
    UnauthorizedException,
    ValidationException,
)
from pinifast.core.security import create_access_token, decode_access_token
from pinifast.domain.models.user import User
from pinifast.domain.schemas.auth import AuthResponse, CurrentUser, LoginRequest, RegisterRequest
from pinifast.domain.schemas.user import UserCreate

logger = structlog.get_logger(__name__)


class AuthService:
    def __init__(
        self,
        user_service: UserService,
        role_service: RoleService,
        settings: Optional[Settings] = None,
    ):
        self.user_service = user_service
        self.role_service = role_service
        self.settings = settings or get_settings()

    def _issue_token(self, user: User, roles: List[str]) -> str:
        return create_access_token({
            "sub": user.id,
            "id": user.id,
            "email": user.email,
            "roles": roles,
        })

    def _build_auth_response(self, user: User) -> AuthResponse:
        roles = self.role_service.get_role_names(user.id)
        return AuthResponse(
            user=self.user_service.to_public(user),
            access_token=self._issue_token(user, roles),
            expires_in=self.settings.JWT_EXPIRATION_MINUTES * 60,
        )

    def login(self, credentials: LoginRequest) -> AuthResponse:
        user = self.user_service.find_by_email(credentials.email)
        if user is None:
            logger.warning("Login failed: unknown email", email=credentials.email)
            raise UnauthorizedException("Invalid email or password")

        if not user.is_active:
            logger.warning("Login failed: account deactivated", user_id=user.id)
            raise UnauthorizedException("Account is deactivated")

        if not self.user_service.validate_password(user, credentials.password):
            logger.warning("Login failed: wrong password", user_id=user.id)
            raise UnauthorizedException("Invalid email or password")

        user = self.user_service.update_last_login(user.id) or user
        logger.info("User logged in", user_id=user.id)
        return self._build_auth_response(user)

    def register(self, data: RegisterRequest, requesting_user: Optional[CurrentUser] = None) -> AuthResponse:
        """Create an account.

        Only an admin may pick roles for the new account; everyone else gets
        the configured default role.
        """
        is_admin = requesting_user is not None and requesting_user.is_admin
        if data.roles and not is_admin:
            raise ForbiddenException("Only administrators can assign roles during registration")

        requested = []
        for name in data.roles or []:
            role = self.role_service.find_role_by_name(name)
            if role is None:
                raise ValidationException(f"Role '{name}' does not exist")
            requested.append(role)

        user = self.user_service.create(UserCreate(
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
            password=data.password,
        ))

        if requested:
            for role in requested:
                self.role_service.assign_role_to_user(user.id, role.id, requesting_user.id)
        else:
            default_role = self.role_service.find_role_by_name(self.settings.DEFAULT_ROLE)
            if default_role is None:
                logger.warning("Default role missing, user registered without roles",
                               role=self.settings.DEFAULT_ROLE)
            else:
                self.role_service.assign_role_to_user(user.id, default_role.id, user.id)

        logger.info("User registered", user_id=user.id, email=user.email)
        return self._build_auth_response(user)

    def validate_token(self, token: str) -> CurrentUser:
        payload = decode_access_token(token)

        user_id = payload.get("id") or payload.get("sub")
        if not user_id:
            raise UnauthorizedException("Invalid token")

        user = self.user_service.find_by_id(user_id)
        if user is None or not user.is_active:
            raise UnauthorizedException("User not found or inactive")

        return CurrentUser(id=user.id, email=user.email, roles=payload.get("roles") or [])

    def refresh_token(self, token: str) -> AuthResponse:
        current = self.validate_token(token)
        user = self.user_service.get_by_id(current.id)
        logger.info("Token refreshed", user_id=user.id)
        return self._build_auth_response(user)

    def logout(self, user: CurrentUser) -> None:
        logger.info("User logged out", user_id=user.id, email=user.email)
