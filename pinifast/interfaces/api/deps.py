"""FastAPI dependencies — bearer token extraction and role gates."""

from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader

from pinifast.application.services.auth_service import AuthService
from pinifast.core.exceptions import ForbiddenException, UnauthorizedException
from pinifast.domain.schemas.auth import CurrentUser
from pinifast.interfaces.deps import get_auth_service

# Accepts "Bearer <token>" as well as a bare token value.
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def extract_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, credentials = authorization.strip().partition(" ")
    if credentials and scheme.lower() == "bearer":
        return credentials.strip() or None
    return authorization.strip() or None


def get_current_user(
    authorization: Optional[str] = Depends(authorization_header),
    auth_service: AuthService = Depends(get_auth_service),
) -> CurrentUser:
    """Extract and validate the current user from the JWT token."""
    token = extract_token(authorization)
    if token is None:
        raise UnauthorizedException("Authentication required")
    return auth_service.validate_token(token)


def get_optional_user(
    authorization: Optional[str] = Depends(authorization_header),
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[CurrentUser]:
    """Like get_current_user, but anonymous or bad tokens yield None."""
    token = extract_token(authorization)
    if token is None:
        return None
    try:
        return auth_service.validate_token(token)
    except UnauthorizedException:
        return None


def require_roles(*roles: str):
    """Gate that passes when the caller holds any of ``roles``."""

    def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not user.has_any_role(roles):
            raise ForbiddenException(
                f"Access denied. Required roles: {', '.join(roles)}",
                details={"requiredRoles": list(roles), "userRoles": user.roles},
            )
        return user

    return dependency


require_admin = require_roles("admin")
