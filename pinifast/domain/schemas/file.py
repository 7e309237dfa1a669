"""Pydantic schemas for uploaded files."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pinifast.domain.schemas.common import CamelModel


class FileRead(CamelModel):
    id: str
    original_name: str
    filename: str
    mime_type: str
    size: int
    path: str
    uploaded_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class FileUploadResult(CamelModel):
    file: FileRead
    url: str


class FileUpdate(CamelModel):
    original_name: str = Field(min_length=1)


class FileStats(CamelModel):
    total_files: int
    total_size: int
    average_size: int
