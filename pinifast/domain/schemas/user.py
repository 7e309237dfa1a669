"""Pydantic schemas for the User domain."""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from pinifast.domain.schemas.common import CamelModel


class UserCreate(CamelModel):
    email: EmailStr
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    password: str = Field(min_length=6)


class UserUpdate(CamelModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    password: Optional[str] = Field(default=None, min_length=6)
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def at_least_one_field(self):
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided")
        return self


class UserRead(CamelModel):
    """Public projection of a user; the password hash never leaves the service layer."""

    id: str
    email: str
    first_name: str
    last_name: str
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class UserSummary(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str
