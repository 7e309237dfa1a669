"""User service — account lifecycle, password handling and the public projection."""

from typing import List, Optional

import structlog

from pinifast.config import Settings, get_settings
from pinifast.core.exceptions import EntityNotFoundException, ValidationException
from pinifast.core.security import hash_password, verify_password
from pinifast.domain.models.user import User
from pinifast.domain.schemas.user import UserCreate, UserRead, UserUpdate
from pinifast.infrastructure.database import utcnow
from pinifast.infrastructure.repositories.role_repository import SQLAlchemyUserRoleRepository
from pinifast.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

logger = structlog.get_logger(__name__)


class UserService:
    """Business rules for users on top of the user repository."""

    def __init__(
        self,
        users: SQLAlchemyUserRepository,
        user_roles: SQLAlchemyUserRoleRepository,
        settings: Optional[Settings] = None,
    ):
        self.users = users
        self.user_roles = user_roles
        self.settings = settings or get_settings()

    def find_all(self) -> List[User]:
        return self.users.find_all()

    def find_by_id(self, user_id: str) -> Optional[User]:
        if not user_id:
            raise ValidationException("User ID is required")
        return self.users.find_by_id(user_id)

    def get_by_id(self, user_id: str) -> User:
        user = self.find_by_id(user_id)
        if user is None:
            raise EntityNotFoundException("User not found")
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        if not email:
            raise ValidationException("Email is required")
        return self.users.find_by_email(email)

    def create(self, data: UserCreate) -> User:
        # Not atomic; the UNIQUE constraint on users.email catches a lost race.
        if self.find_by_email(data.email):
            raise ValidationException("User with this email already exists")

        user = self.users.create({
            "email": data.email.lower(),
            "first_name": data.first_name,
            "last_name": data.last_name,
            "password_hash": hash_password(data.password, self.settings.BCRYPT_ROUNDS),
            "is_active": True,
        })
        logger.info("User created", user_id=user.id, email=user.email)
        return user

    def update(self, user_id: str, data: UserUpdate) -> User:
        existing = self.get_by_id(user_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in changes:
            changes["email"] = changes["email"].lower()
            if changes["email"] != existing.email:
                conflict = self.find_by_email(changes["email"])
                if conflict and conflict.id != user_id:
                    raise ValidationException("User with this email already exists")

        password = changes.pop("password", None)
        if password:
            changes["password_hash"] = hash_password(password, self.settings.BCRYPT_ROUNDS)

        updated = self.users.update(user_id, changes)
        if updated is None:
            raise EntityNotFoundException("User not found")

        logger.info("User updated", user_id=updated.id, email=updated.email)
        return updated

    def delete(self, user_id: str) -> bool:
        email = self.get_by_id(user_id).email

        # Files and products keep their reference to the removed user.
        removed_roles = self.user_roles.delete_by_user(user_id)
        deleted = self.users.delete(user_id)
        if deleted:
            logger.info("User deleted", user_id=user_id, email=email, removed_roles=removed_roles)
        return deleted

    def validate_password(self, user: User, password: str) -> bool:
        return verify_password(password, user.password_hash)

    def update_last_login(self, user_id: str) -> Optional[User]:
        return self.users.update(user_id, {"last_login": utcnow()})

    @staticmethod
    def to_public(user: User) -> UserRead:
        return UserRead.model_validate(user)
