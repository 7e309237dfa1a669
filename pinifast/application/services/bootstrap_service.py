"""Bootstrap service — seeds default roles and the initial admin account."""

from typing import Optional

import structlog

from pinifast.application.services.role_service import RoleService
from pinifast.application.services.user_service import UserService
from pinifast.config import Settings, get_settings
from pinifast.core.exceptions import EntityNotFoundException, ValidationException
from pinifast.domain.models.user import User
from pinifast.domain.schemas.user import UserCreate

logger = structlog.get_logger(__name__)

ADMIN_ROLE = "admin"

DEFAULT_ROLES = [
    {"name": "admin", "description": "Administrator with full system access"},
    {"name": "user", "description": "Regular user with basic access"},
    {"name": "moderator", "description": "Moderator with limited administrative access"},
]


class BootstrapService:
    def __init__(
        self,
        user_service: UserService,
        role_service: RoleService,
        settings: Optional[Settings] = None,
    ):
        self.user_service = user_service
        self.role_service = role_service
        self.settings = settings or get_settings()

    def initialize(self) -> None:
        """Run every seed step. Safe to call on every startup."""
        logger.info("Starting database initialization")
        self.initialize_roles()
        if self.settings.ENABLE_ADMIN_BOOTSTRAP:
            self.initialize_admin_user()
        logger.info("Database initialization completed")

    def initialize_roles(self) -> None:
        roles = list(DEFAULT_ROLES)
        default_role = self.settings.DEFAULT_ROLE.lower()
        if default_role not in {r["name"] for r in roles}:
            roles.append({"name": default_role, "description": "Default role for new accounts"})

        for role in roles:
            if self.role_service.find_role_by_name(role["name"]):
                logger.debug("Role already exists", role=role["name"])
                continue
            self.role_service.create_role(role["name"], role["description"])
            logger.info("Created default role", role=role["name"])

    def _grant_admin(self, user: User) -> None:
        admin_role = self.role_service.find_role_by_name(ADMIN_ROLE)
        if admin_role is None:
            logger.error("Admin role not found during admin initialization")
            raise EntityNotFoundException("Admin role not found")
        self.role_service.assign_role_to_user(user.id, admin_role.id, user.id)

    def initialize_admin_user(self) -> User:
        email = self.settings.ADMIN_EMAIL

        existing = self.user_service.find_by_email(email)
        if existing:
            logger.info("Admin user already exists", email=existing.email)
            if not self.role_service.user_has_role(existing.id, ADMIN_ROLE):
                self._grant_admin(existing)
                logger.info("Assigned admin role to existing user", email=existing.email)
            return existing

        admin = self.user_service.create(UserCreate(
            email=email,
            first_name=self.settings.ADMIN_FIRST_NAME,
            last_name=self.settings.ADMIN_LAST_NAME,
            password=self.settings.ADMIN_PASSWORD,
        ))
        self._grant_admin(admin)
        logger.info("Created admin user", email=admin.email)

        if self.settings.is_production():
            logger.warning(
                "Default admin user created in production, change the admin password immediately"
            )
        return admin

    def check_admin_exists(self) -> bool:
        admin_role = self.role_service.find_role_by_name(ADMIN_ROLE)
        if admin_role is None:
            return False
        return len(self.role_service.get_users_by_role(admin_role.id)) > 0

    def create_emergency_admin(self, email: str, password: str) -> User:
        logger.warning("Creating emergency admin user", email=email)

        if self.user_service.find_by_email(email):
            raise ValidationException("User with this email already exists")

        admin = self.user_service.create(UserCreate(
            email=email,
            first_name="Emergency",
            last_name="Admin",
            password=password,
        ))
        self._grant_admin(admin)
        logger.warning("Emergency admin user created", email=admin.email)
        return admin
