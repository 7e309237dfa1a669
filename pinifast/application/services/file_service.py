"""File service — uploads to the local uploads directory with metadata in SQLite."""

import os
import time
from typing import List, Optional

import structlog

from pinifast.config import Settings, get_settings
from pinifast.core.exceptions import (
    EntityNotFoundException,
    ForbiddenException,
    ValidationException,
)
from pinifast.core.identifiers import random_base36
from pinifast.domain.models.file import FileRecord
from pinifast.domain.schemas.file import FileStats
from pinifast.infrastructure.repositories.file_repository import SQLAlchemyFileRepository

logger = structlog.get_logger(__name__)

# Common filesystem limit for a single path component.
MAX_FILENAME_BYTES = 255


class FileService:
    """Manages file content on disk and metadata rows."""

    def __init__(self, files: SQLAlchemyFileRepository, settings: Optional[Settings] = None):
        self.files = files
        self.settings = settings or get_settings()
        self.upload_dir = os.path.abspath(self.settings.UPLOAD_DIR)
        self._ensure_upload_dir()

    def _ensure_upload_dir(self) -> None:
        if not os.path.isdir(self.upload_dir):
            os.makedirs(self.upload_dir, exist_ok=True)
            logger.info("Created uploads directory", path=self.upload_dir)

    def _validate_upload(self, content: bytes, original_name: str) -> None:
        allowed = self.settings.allowed_file_types
        extension = os.path.splitext(original_name)[1].lower().lstrip(".")
        if extension not in allowed:
            raise ValidationException(
                f"File type '{extension}' is not allowed. Allowed types: {', '.join(allowed)}"
            )

        if len(content) > self.settings.MAX_FILE_SIZE:
            raise ValidationException(
                f"File size exceeds maximum allowed size of {self.settings.MAX_FILE_SIZE} bytes"
            )

    @staticmethod
    def _storage_name(original_name: str) -> str:
        """`<ms>_<random>_<name>`, shortening the name stem to fit the filesystem limit."""
        prefix = f"{int(time.time() * 1000)}_{random_base36()}_"
        stem, extension = os.path.splitext(os.path.basename(original_name))
        budget = MAX_FILENAME_BYTES - len(prefix.encode()) - len(extension.encode())
        stem = stem.encode()[:budget].decode("utf-8", "ignore")
        return f"{prefix}{stem}{extension}"

    def _remove_from_disk(self, path: str, reason: str) -> None:
        try:
            os.remove(path)
        except OSError as exc:
            logger.warning(reason, path=path, error=str(exc))

    def upload_file(
        self,
        content: bytes,
        original_name: str,
        mime_type: str,
        uploaded_by: Optional[str] = None,
    ) -> FileRecord:
        """Validate, write to disk, then record metadata.

        Nothing touches the disk until validation passes. A metadata failure
        removes the written file again; a failed removal is only logged.
        """
        if not original_name:
            raise ValidationException("No file provided")
        self._validate_upload(content, original_name)

        filename = self._storage_name(original_name)
        file_path = os.path.join(self.upload_dir, filename)

        try:
            with open(file_path, "wb") as f:
                f.write(content)

            record = self.files.create({
                "original_name": original_name,
                "filename": filename,
                "mime_type": mime_type,
                "size": len(content),
                "path": file_path,
                "uploaded_by": uploaded_by,
            })
        except Exception:
            if os.path.exists(file_path):
                self._remove_from_disk(file_path, "Failed to clean up file after database error")
            logger.exception("File upload failed", original_name=original_name)
            raise

        logger.info("File uploaded", filename=filename, size=len(content))
        return record

    def get_file_by_id(self, file_id: str) -> Optional[FileRecord]:
        if not file_id:
            raise ValidationException("File ID is required")
        return self.files.find_by_id(file_id)

    def get_file(self, file_id: str) -> FileRecord:
        record = self.get_file_by_id(file_id)
        if record is None:
            raise EntityNotFoundException("File not found")
        return record

    def get_files_by_user(self, user_id: str) -> List[FileRecord]:
        if not user_id:
            raise ValidationException("User ID is required")
        return self.files.find_by_uploader(user_id)

    def get_all_files(self) -> List[FileRecord]:
        return self.files.find_all()

    def get_file_content(self, file_id: str) -> bytes:
        record = self.get_file(file_id)
        try:
            with open(record.path, "rb") as f:
                content = f.read()
        except OSError as exc:
            logger.error("Failed to read file from disk", path=record.path, error=str(exc))
            raise EntityNotFoundException("File not found on disk")

        logger.debug("File content retrieved", filename=record.filename, size=len(content))
        return content

    @staticmethod
    def _check_owner(record: FileRecord, user_id: Optional[str], action: str) -> None:
        if user_id and record.uploaded_by and record.uploaded_by != user_id:
            raise ForbiddenException(f"You do not have permission to {action} this file")

    def delete_file(self, file_id: str, user_id: Optional[str] = None) -> bool:
        """Delete the row, then the disk file. ``user_id`` restricts to the owner."""
        record = self.get_file(file_id)
        self._check_owner(record, user_id, "delete")

        path, filename = record.path, record.filename

        deleted = self.files.delete(file_id)
        if deleted:
            self._remove_from_disk(path, "File deleted from database but failed to delete from disk")
            logger.info("File deleted", filename=filename)
        return deleted

    def update_file_metadata(self, file_id: str, original_name: str, user_id: Optional[str] = None) -> FileRecord:
        record = self.get_file(file_id)
        self._check_owner(record, user_id, "update")

        updated = self.files.update(file_id, {"original_name": original_name})
        if updated is None:
            raise EntityNotFoundException("File not found")

        logger.info("File metadata updated", file_id=file_id)
        return updated

    def get_file_stats(self) -> FileStats:
        return FileStats(**self.files.get_stats())
