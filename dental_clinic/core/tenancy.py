"""
Tenant-scoped persistence helpers.

Every read and write of a tenant-owned entity goes through
:class:`TenantScopedRepository`, which filters on the caller's tenant and
hides soft-deleted rows. An entity of another tenant is reported exactly
like a missing one.
"""
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Generic, Iterator, List, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import Column, DateTime, ForeignKey, Uuid
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declared_attr

from ..exceptions import NotFoundException

# Set up logging
logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class TenantScopedMixin:
    """Adds the owning tenant foreign key to a model."""

    @declared_attr
    def tenant_id(cls):
        return Column(Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)


class SoftDeleteMixin:
    """Adds a deletion timestamp; rows with one set are hidden from default reads."""

    deleted_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


def commit_or_rollback(db: Session, action: str) -> None:
    """
    Commit the session, rolling back if the commit fails.

    Args:
        db: Database session
        action: Short description used in the error log

    Raises:
        SQLAlchemyError: Re-raised after the rollback
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error while {action}: {str(e)}")
        raise


@contextmanager
def atomic(db: Session, action: str) -> Iterator[Session]:
    """
    Run a block of writes as one transaction.

    The block commits when it finishes; any exception rolls back every
    write made inside it and is re-raised.

    Args:
        db: Database session
        action: Short description used in the log
    """
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        logger.warning(f"Rolled back {action}: {e.__class__.__name__}: {e}")
        raise


class TenantScopedRepository(Generic[ModelT]):
    """
    Data access for one tenant-owned model.

    Args:
        db: Database session
        model: SQLAlchemy model class carrying ``tenant_id``
    """

    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model
        self.soft_delete_enabled = issubclass(model, SoftDeleteMixin)

    def _query(self, tenant_id: UUID, include_deleted: bool = False):
        query = self.db.query(self.model).filter(self.model.tenant_id == tenant_id)
        if self.soft_delete_enabled and not include_deleted:
            query = query.filter(self.model.deleted_at.is_(None))
        return query

    def find_by_id(self, entity_id: UUID, tenant_id: UUID, include_deleted: bool = False) -> Optional[ModelT]:
        """Return the entity if it exists, belongs to the tenant and is not deleted."""
        return self._query(tenant_id, include_deleted).filter(self.model.id == entity_id).first()

    def get_or_404(self, entity_id: UUID, tenant_id: UUID, detail: Optional[str] = None) -> ModelT:
        """
        Fetch an entity within the tenant.

        Raises:
            NotFoundException: If absent, deleted, or owned by another tenant
        """
        entity = self.find_by_id(entity_id, tenant_id)
        if entity is None:
            raise NotFoundException(detail or f"{self.model.__name__} not found")
        return entity

    def find_one_by(self, tenant_id: UUID, **filters: Any) -> Optional[ModelT]:
        return self._query(tenant_id).filter_by(**filters).first()

    def list(self, tenant_id: UUID, order_by=None) -> List[ModelT]:
        query = self._query(tenant_id)
        if order_by is not None:
            query = query.order_by(order_by)
        return query.all()

    def save(self, entity: ModelT, commit: bool = True) -> ModelT:
        """
        Persist an entity.

        With ``commit=False`` the change is only flushed, so the caller can
        group several writes into one transaction.
        """
        if entity.tenant_id is None:
            raise ValueError(f"{self.model.__name__} must carry a tenant_id before it is saved")
        self.db.add(entity)
        if commit:
            commit_or_rollback(self.db, f"saving {self.model.__name__}")
            self.db.refresh(entity)
        else:
            self.db.flush()
        return entity

    def soft_delete(self, entity: ModelT, commit: bool = True) -> ModelT:
        """Mark an entity as deleted instead of removing the row."""
        if not self.soft_delete_enabled:
            raise TypeError(f"{self.model.__name__} does not support soft deletion")
        entity.deleted_at = datetime.now(timezone.utc)
        return self.save(entity, commit=commit)
