"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from pinifast.application.services.auth_service import AuthService
from pinifast.application.services.bootstrap_service import BootstrapService
from pinifast.application.services.file_service import FileService
from pinifast.application.services.product_service import ProductService
from pinifast.application.services.role_service import RoleService
from pinifast.application.services.user_service import UserService
from pinifast.config import get_settings
from pinifast.infrastructure.database import get_db
from pinifast.infrastructure.repositories.file_repository import SQLAlchemyFileRepository
from pinifast.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from pinifast.infrastructure.repositories.role_repository import (
    SQLAlchemyRoleRepository,
    SQLAlchemyUserRoleRepository,
)
from pinifast.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(SQLAlchemyUserRepository(db), SQLAlchemyUserRoleRepository(db), get_settings())


def get_role_service(db: Session = Depends(get_db)) -> RoleService:
    return RoleService(
        SQLAlchemyRoleRepository(db),
        SQLAlchemyUserRoleRepository(db),
        SQLAlchemyUserRepository(db),
        get_settings(),
    )


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(get_user_service(db), get_role_service(db), get_settings())


def get_bootstrap_service(db: Session = Depends(get_db)) -> BootstrapService:
    return BootstrapService(get_user_service(db), get_role_service(db), get_settings())


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(SQLAlchemyProductRepository(db))


def get_file_service(db: Session = Depends(get_db)) -> FileService:
    return FileService(SQLAlchemyFileRepository(db), get_settings())
