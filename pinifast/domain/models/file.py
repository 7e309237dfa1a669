"""Uploaded file metadata — maps to the 'files' table."""

from sqlalchemy import Column, ForeignKey, Integer, String

from pinifast.infrastructure.database import Base, EntityMixin


class FileRecord(EntityMixin, Base):
    __tablename__ = "files"

    original_name = Column(String(500), nullable=False)
    filename = Column(String(600), nullable=False)
    mime_type = Column(String(255), nullable=False)
    size = Column(Integer, nullable=False)
    path = Column(String(1000), nullable=False)
    # Not enforced: rows outlive the uploading user.
    uploaded_by = Column(String(32), ForeignKey("users.id"), nullable=True, index=True)

    def __repr__(self):
        return f"<FileRecord {self.original_name} ({self.size} bytes)>"
