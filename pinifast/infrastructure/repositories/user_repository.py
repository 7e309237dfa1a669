"""
SQLAlchemy implementation of the User repositories.
"""

from typing import Optional

from sqlalchemy.orm import Session

from pinifast.domain.models.user import User
from pinifast.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User]):
    """User repository; emails are stored lower-cased."""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.find_one(email=email.lower())
