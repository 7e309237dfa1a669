"""Role and role-assignment models — 'roles' and 'user_roles' tables."""

from sqlalchemy import Column, ForeignKey, String, Text, UniqueConstraint

from pinifast.infrastructure.database import Base, EntityMixin, UTCDateTime


class Role(EntityMixin, Base):
    __tablename__ = "roles"

    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False)

    def __repr__(self):
        return f"<Role {self.name}>"


class UserRole(EntityMixin, Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role_id", name="uq_user_roles_user_role"),)

    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    role_id = Column(String(32), ForeignKey("roles.id"), nullable=False, index=True)
    assigned_at = Column(UTCDateTime, nullable=False)
    assigned_by = Column(String(32), ForeignKey("users.id"), nullable=False)

    def __repr__(self):
        return f"<UserRole user={self.user_id} role={self.role_id}>"
