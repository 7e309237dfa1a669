"""Role service — role CRUD, assignment and membership queries."""

from typing import Iterable, List, Optional

import structlog

from pinifast.config import Settings, get_settings
from pinifast.core.exceptions import EntityNotFoundException, ValidationException
from pinifast.domain.models.role import Role
from pinifast.domain.models.user import User
from pinifast.domain.schemas.role import RoleAssignmentRead, RoleRead, UserWithRoles
from pinifast.domain.schemas.user import UserRead, UserSummary
from pinifast.infrastructure.database import utcnow
from pinifast.infrastructure.repositories.role_repository import (
    SQLAlchemyRoleRepository,
    SQLAlchemyUserRoleRepository,
)
from pinifast.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

logger = structlog.get_logger(__name__)


class RoleService:
    def __init__(
        self,
        roles: SQLAlchemyRoleRepository,
        user_roles: SQLAlchemyUserRoleRepository,
        users: SQLAlchemyUserRepository,
        settings: Optional[Settings] = None,
    ):
        self.roles = roles
        self.user_roles = user_roles
        self.users = users
        self.settings = settings or get_settings()

    def find_all_roles(self) -> List[Role]:
        return self.roles.find_all()

    def find_role_by_id(self, role_id: str) -> Optional[Role]:
        if not role_id:
            raise ValidationException("Role ID is required")
        return self.roles.find_by_id(role_id)

    def get_role_by_id(self, role_id: str) -> Role:
        role = self.find_role_by_id(role_id)
        if role is None:
            raise EntityNotFoundException("Role not found")
        return role

    def find_role_by_name(self, name: str) -> Optional[Role]:
        if not name:
            raise ValidationException("Role name is required")
        return self.roles.find_by_name(name)

    def create_role(self, name: str, description: str) -> Role:
        if self.find_role_by_name(name):
            raise ValidationException(f"Role with name '{name}' already exists")

        role = self.roles.create({"name": name.lower(), "description": description})
        logger.info("Role created", role=role.name, role_id=role.id)
        return role

    def update_role(self, role_id: str, name: Optional[str] = None, description: Optional[str] = None) -> Role:
        existing = self.get_role_by_id(role_id)

        if name and name.lower() != existing.name:
            conflict = self.find_role_by_name(name)
            if conflict and conflict.id != role_id:
                raise ValidationException(f"Role with name '{name}' already exists")

        changes = {}
        if name is not None:
            changes["name"] = name.lower()
        if description is not None:
            changes["description"] = description

        updated = self.roles.update(role_id, changes)
        if updated is None:
            raise EntityNotFoundException("Role not found")

        logger.info("Role updated", role=updated.name, role_id=updated.id)
        return updated

    def delete_role(self, role_id: str) -> bool:
        role = self.get_role_by_id(role_id)

        assigned = self.user_roles.count_by_role(role_id)
        if assigned > 0:
            raise ValidationException(
                f"Cannot delete role '{role.name}' as it is assigned to {assigned} user(s)",
                details={"assignedUsers": assigned},
            )

        name = role.name
        deleted = self.roles.delete(role_id)
        if deleted:
            logger.info("Role deleted", role=name, role_id=role_id)
        return deleted

    def assign_role_to_user(self, user_id: str, role_id: str, assigned_by: str) -> RoleAssignmentRead:
        if not user_id or not role_id or not assigned_by:
            raise ValidationException("User ID, Role ID, and Assigned By are required")

        user = self.users.find_by_id(user_id)
        if user is None:
            raise EntityNotFoundException("User not found")

        role = self.roles.find_by_id(role_id)
        if role is None:
            raise EntityNotFoundException("Role not found")

        assigner = self.users.find_by_id(assigned_by)
        if assigner is None:
            raise EntityNotFoundException("Assigner user not found")

        if self.user_roles.find_assignment(user_id, role_id):
            raise ValidationException(f"Role '{role.name}' is already assigned to this user")

        assignment = self.user_roles.create({
            "user_id": user_id,
            "role_id": role_id,
            "assigned_at": utcnow(),
            "assigned_by": assigned_by,
        })

        if self.settings.ROLE_ASSIGNMENT_AUDIT:
            logger.info("Role assigned", role=role.name, user=user.email, assigned_by=assigner.email)

        return RoleAssignmentRead(
            id=assignment.id,
            user_id=assignment.user_id,
            role_id=assignment.role_id,
            assigned_at=assignment.assigned_at,
            assigned_by=assignment.assigned_by,
            user=UserSummary.model_validate(user),
            role=RoleRead.model_validate(role),
            assigned_by_user=UserSummary.model_validate(assigner),
        )

    def remove_role_from_user(self, user_id: str, role_id: str) -> bool:
        if not user_id or not role_id:
            raise ValidationException("User ID and Role ID are required")

        assignment = self.user_roles.find_assignment(user_id, role_id)
        if assignment is None:
            raise EntityNotFoundException("Role assignment not found")

        deleted = self.user_roles.delete(assignment.id)
        if deleted and self.settings.ROLE_ASSIGNMENT_AUDIT:
            user = self.users.find_by_id(user_id)
            role = self.roles.find_by_id(role_id)
            logger.info(
                "Role removed",
                role=role.name if role else role_id,
                user=user.email if user else user_id,
            )
        return deleted

    def get_user_roles(self, user_id: str) -> List[Role]:
        if not user_id:
            raise ValidationException("User ID is required")

        roles = []
        for assignment in self.user_roles.find_by_user(user_id):
            role = self.roles.find_by_id(assignment.role_id)
            if role:
                roles.append(role)
        return roles

    def get_role_names(self, user_id: str) -> List[str]:
        return [role.name for role in self.get_user_roles(user_id)]

    def get_user_with_roles(self, user_id: str) -> Optional[UserWithRoles]:
        if not user_id:
            raise ValidationException("User ID is required")

        user = self.users.find_by_id(user_id)
        if user is None:
            return None

        return UserWithRoles(
            **UserRead.model_validate(user).model_dump(),
            roles=[RoleRead.model_validate(role) for role in self.get_user_roles(user_id)],
        )

    def get_users_by_role(self, role_id: str) -> List[User]:
        if not role_id:
            raise ValidationException("Role ID is required")

        users = []
        for assignment in self.user_roles.find_by_role(role_id):
            user = self.users.find_by_id(assignment.user_id)
            if user:
                users.append(user)
        return users

    def user_has_role(self, user_id: str, role_name: str) -> bool:
        if not user_id or not role_name:
            return False

        role = self.roles.find_by_name(role_name)
        if role is None:
            return False
        return self.user_roles.find_assignment(user_id, role.id) is not None

    def user_has_any_role(self, user_id: str, role_names: Iterable[str]) -> bool:
        return any(self.user_has_role(user_id, name) for name in role_names)
