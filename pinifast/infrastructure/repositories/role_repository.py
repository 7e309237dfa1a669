"""
SQLAlchemy implementation of the Role and UserRole repositories.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from pinifast.domain.models.role import Role, UserRole
from pinifast.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyRoleRepository(SQLAlchemyRepository[Role]):
    def __init__(self, db: Session):
        super().__init__(db, Role)

    def find_by_name(self, name: str) -> Optional[Role]:
        return self.find_one(name=name.lower())


class SQLAlchemyUserRoleRepository(SQLAlchemyRepository[UserRole]):
    """Join table between users and roles."""

    def __init__(self, db: Session):
        super().__init__(db, UserRole)

    def find_assignment(self, user_id: str, role_id: str) -> Optional[UserRole]:
        return self.find_one(user_id=user_id, role_id=role_id)

    def find_by_user(self, user_id: str) -> List[UserRole]:
        return self.find_by_query(user_id=user_id)

    def find_by_role(self, role_id: str) -> List[UserRole]:
        return self.find_by_query(role_id=role_id)

    def count_by_role(self, role_id: str) -> int:
        return self.count(role_id=role_id)

    def delete_by_user(self, user_id: str) -> int:
        assignments = self.find_by_user(user_id)
        for assignment in assignments:
            self.db.delete(assignment)
        self._commit()
        return len(assignments)
