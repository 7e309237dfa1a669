"""User domain model — maps to the 'users' table."""

from sqlalchemy import Boolean, Column, String

from pinifast.infrastructure.database import Base, EntityMixin, UTCDateTime


class User(EntityMixin, Base):
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(UTCDateTime, nullable=True)

    def __repr__(self):
        return f"<User {self.email}>"
