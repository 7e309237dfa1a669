"""Pydantic schemas for roles and role assignments."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pinifast.domain.schemas.common import CamelModel
from pinifast.domain.schemas.user import UserRead, UserSummary


class RoleCreate(CamelModel):
    name: str = Field(min_length=2)
    description: str = Field(min_length=5)


class RoleUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=2)
    description: Optional[str] = Field(default=None, min_length=5)


class RoleRead(CamelModel):
    id: str
    name: str
    description: str
    created_at: datetime
    updated_at: datetime


class RoleAssignmentRequest(CamelModel):
    user_id: str = Field(min_length=1)
    role_id: str = Field(min_length=1)


class RoleAssignmentRead(CamelModel):
    id: str
    user_id: str
    role_id: str
    assigned_at: datetime
    assigned_by: str
    user: UserSummary
    role: RoleRead
    assigned_by_user: UserSummary


class UserWithRoles(UserRead):
    roles: list[RoleRead] = []
