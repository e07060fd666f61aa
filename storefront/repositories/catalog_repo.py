# storefront/repositories/catalog_repo.py
import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import func
from sqlmodel import Session, select

from storefront.models.catalog import CatalogRecord, normalize_title

R = TypeVar("R", bound=CatalogRecord)


class CatalogRepository(Generic[R]):
    """
    Data access layer shared by all catalog kinds.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    - Slug matching is case-insensitive; titles match on the stored
      casefolded title_key.
    """

    def __init__(self, model: type[R]):
        self.model = model

    def get_by_id(self, session: Session, record_id: uuid.UUID) -> R | None:
        return session.get(self.model, record_id)

    def get_by_slug(self, session: Session, slug: str) -> R | None:
        stmt = select(self.model).where(func.lower(self.model.slug) == slug.strip().lower())
        return session.exec(stmt).first()

    def slug_holder(self, session: Session, slug: str) -> uuid.UUID | None:
        record = self.get_by_slug(session, slug)
        return record.id if record is not None else None

    def title_taken(
        self,
        session: Session,
        title: str,
        exclude_id: uuid.UUID | None = None,
    ) -> bool:
        stmt = select(self.model.id).where(self.model.title_key == normalize_title(title))
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        return session.exec(stmt).first() is not None

    def list(
        self,
        session: Session,
        filters: dict[str, Any] | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[R]:
        stmt = select(self.model)
        for field, value in (filters or {}).items():
            stmt = stmt.where(getattr(self.model, field) == value)
        stmt = stmt.order_by(self.model.created_at.desc()).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(session.exec(stmt).all())

    def count(self, session: Session, filters: dict[str, Any] | None = None) -> int:
        stmt = select(func.count()).select_from(self.model)
        for field, value in (filters or {}).items():
            stmt = stmt.where(getattr(self.model, field) == value)
        return session.exec(stmt).one()

    def create(self, session: Session, record: R) -> R:
        session.add(record)
        session.commit()
        session.refresh(record)
        return record

    def update(self, session: Session, record: R) -> R:
        session.add(record)
        session.commit()
        session.refresh(record)
        return record

    def delete(self, session: Session, record: R) -> None:
        session.delete(record)
        session.commit()
