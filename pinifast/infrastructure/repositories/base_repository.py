"""
SQLAlchemy implementation of the Base Repository.
"""

from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar

import structlog
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pinifast.core.exceptions import ValidationException
from pinifast.core.identifiers import generate_id
from pinifast.domain.repositories.base import BaseRepository
from pinifast.infrastructure.database import Base, utcnow

ModelType = TypeVar("ModelType", bound=Base)

logger = structlog.get_logger(__name__)

_MANAGED_FIELDS = {"id", "created_at", "updated_at"}


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model
        self.table = model.__tablename__
        self._columns = {attr.key for attr in sa_inspect(model).column_attrs}

    def _check_fields(self, fields) -> None:
        unknown = set(fields) - self._columns
        if unknown:
            raise ValidationException(
                f"Unknown field(s) for {self.table}: {', '.join(sorted(unknown))}"
            )

    @staticmethod
    def _as_dict(obj_in: Any) -> dict:
        if hasattr(obj_in, "model_dump"):
            return obj_in.model_dump(exclude_unset=True)
        return dict(obj_in)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Constraint violation", table=self.table, error=str(exc.orig))
            raise ValidationException(f"Constraint violation on {self.table}") from exc

    def find_all(self) -> List[ModelType]:
        results = self.db.query(self.model).all()
        logger.debug("Found items", table=self.table, count=len(results))
        return results

    def find_by_id(self, id: str) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def find_one(self, **criteria: Any) -> Optional[ModelType]:
        self._check_fields(criteria)
        return self.db.query(self.model).filter_by(**criteria).first()

    def find_by_query(self, **criteria: Any) -> List[ModelType]:
        self._check_fields(criteria)
        return self.db.query(self.model).filter_by(**criteria).all()

    def count(self, **criteria: Any) -> int:
        self._check_fields(criteria)
        return self.db.query(self.model).filter_by(**criteria).count()

    def create(self, data: Mapping[str, Any]) -> ModelType:
        values = {k: v for k, v in self._as_dict(data).items() if k not in _MANAGED_FIELDS}
        self._check_fields(values)

        now = utcnow()
        db_obj = self.model(**values, id=generate_id(), created_at=now, updated_at=now)
        self.db.add(db_obj)
        self._commit()
        self.db.refresh(db_obj)
        logger.info("Created item", table=self.table, id=db_obj.id)
        return db_obj

    def update(self, id: str, data: Mapping[str, Any]) -> Optional[ModelType]:
        values = {k: v for k, v in self._as_dict(data).items() if k not in _MANAGED_FIELDS}
        self._check_fields(values)

        db_obj = self.find_by_id(id)
        if db_obj is None:
            logger.warning("Item not found for update", table=self.table, id=id)
            return None

        for field, value in values.items():
            setattr(db_obj, field, value)
        db_obj.updated_at = utcnow()

        self._commit()
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, id: str) -> bool:
        db_obj = self.find_by_id(id)
        if db_obj is None:
            logger.warning("Item not found for deletion", table=self.table, id=id)
            return False

        self.db.delete(db_obj)
        self._commit()
        logger.info("Deleted item", table=self.table, id=id)
        return True
