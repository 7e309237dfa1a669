"""Pydantic schemas for authentication."""

from typing import Optional

from pydantic import EmailStr, Field

from pinifast.domain.schemas.common import CamelModel
from pinifast.domain.schemas.user import UserRead


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RegisterRequest(CamelModel):
    email: EmailStr
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    password: str = Field(min_length=6)
    roles: Optional[list[str]] = None


class AuthResponse(CamelModel):
    user: UserRead
    access_token: str
    token_type: str = "Bearer"
    expires_in: int


class CurrentUser(CamelModel):
    """Identity carried by a verified access token."""

    id: str
    email: str
    roles: list[str] = []

    def has_role(self, role: str) -> bool:
        return role.lower() in {r.lower() for r in self.roles}

    def has_any_role(self, roles) -> bool:
        return any(self.has_role(role) for role in roles)

    @property
    def is_admin(self) -> bool:
        return self.has_role("admin")
