"""Shared schema base and the uniform response envelope."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None
    status_code: Optional[int] = None


def ok(data=None, message: Optional[str] = None, status_code: int = 200) -> ApiResponse:
    return ApiResponse(success=True, data=data, message=message, status_code=status_code)
