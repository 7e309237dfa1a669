"""
SQLAlchemy implementation of the FileRecord repository.
"""

from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from pinifast.domain.models.file import FileRecord
from pinifast.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyFileRepository(SQLAlchemyRepository[FileRecord]):
    def __init__(self, db: Session):
        super().__init__(db, FileRecord)

    def find_by_uploader(self, user_id: str) -> List[FileRecord]:
        return self.find_by_query(uploaded_by=user_id)

    def get_stats(self) -> Dict[str, int]:
        """Count and total size of all stored files."""
        total_files, total_size = self.db.query(
            func.count(FileRecord.id),
            func.coalesce(func.sum(FileRecord.size), 0),
        ).one()
        total_files = int(total_files or 0)
        total_size = int(total_size or 0)
        return {
            "total_files": total_files,
            "total_size": total_size,
            "average_size": round(total_size / total_files) if total_files else 0,
        }
