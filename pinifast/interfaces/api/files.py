"""Files API routes — upload, download and metadata management."""

from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from pinifast.application.services.file_service import FileService
from pinifast.core.exceptions import ForbiddenException
from pinifast.domain.schemas.auth import CurrentUser
from pinifast.domain.schemas.common import ApiResponse, ok
from pinifast.domain.schemas.file import FileRead, FileStats, FileUpdate, FileUploadResult
from pinifast.interfaces.api.deps import get_current_user, require_admin
from pinifast.interfaces.deps import get_file_service

router = APIRouter(prefix="/api/files", tags=["Files"])


def _read_all(files) -> List[FileRead]:
    return [FileRead.model_validate(f) for f in files]


@router.post("/upload", response_model=ApiResponse[FileUploadResult], status_code=status.HTTP_201_CREATED)
def upload_file(
    file: UploadFile = File(...),
    user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    content = file.file.read()
    record = service.upload_file(
        content,
        file.filename or "",
        file.content_type or "application/octet-stream",
        user.id,
    )
    result = FileUploadResult(
        file=FileRead.model_validate(record),
        url=f"/api/files/{record.id}/download",
    )
    return ok(result, "File uploaded successfully", status.HTTP_201_CREATED)


@router.get("/stats/overview", response_model=ApiResponse[FileStats])
def file_stats(
    admin: CurrentUser = Depends(require_admin),
    service: FileService = Depends(get_file_service),
):
    return ok(service.get_file_stats(), "File statistics retrieved successfully")


@router.get("/admin/all", response_model=ApiResponse[List[FileRead]])
def all_files(
    admin: CurrentUser = Depends(require_admin),
    service: FileService = Depends(get_file_service),
):
    return ok(_read_all(service.get_all_files()), "All files retrieved successfully")


@router.get("", response_model=ApiResponse[List[FileRead]])
def list_files(
    user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    files = service.get_all_files() if user.is_admin else service.get_files_by_user(user.id)
    return ok(_read_all(files), "Files retrieved successfully")


@router.get("/{file_id}/download")
def download_file(file_id: str, service: FileService = Depends(get_file_service)):
    record = service.get_file(file_id)
    content = service.get_file_content(file_id)
    return Response(
        content=content,
        media_type=record.mime_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(record.original_name)}"},
    )


@router.get("/{file_id}", response_model=ApiResponse[FileRead])
def get_file(
    file_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    record = service.get_file(file_id)
    if not user.is_admin and record.uploaded_by and record.uploaded_by != user.id:
        raise ForbiddenException("Access denied")
    return ok(FileRead.model_validate(record), "File retrieved successfully")


@router.put("/{file_id}", response_model=ApiResponse[FileRead])
def update_file(
    file_id: str,
    body: FileUpdate,
    user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    owner = None if user.is_admin else user.id
    record = service.update_file_metadata(file_id, body.original_name, owner)
    return ok(FileRead.model_validate(record), "File updated successfully")


@router.delete("/{file_id}", response_model=ApiResponse[None])
def delete_file(
    file_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    service.delete_file(file_id, None if user.is_admin else user.id)
    return ok(message="File deleted successfully")
