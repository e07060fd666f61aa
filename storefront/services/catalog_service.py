# storefront/services/catalog_service.py
import logging
import math
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from storefront.core.errors import ConflictError, NotFoundError
from storefront.core.slugs import unique_slug
from storefront.core.storage_utils import (
    AssetStore,
    ImageUpload,
    StoredAsset,
    discard_asset,
    validate_image,
)
from storefront.models.catalog import CatalogRecord, normalize_title
from storefront.repositories.catalog_repo import CatalogRepository
from storefront.schemas.common import ApiModel
from storefront.services.catalog_kinds import CatalogKind

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 9


class CatalogService:
    """
    Business logic for one catalog kind.

    Responsibilities:
      - duplicate title check & slug generation
      - image upload/replace/delete orchestration with the asset store
      - cleanup of a freshly stored image whenever the write that needed
        it fails, so no orphan is left behind
    Admin-only writes are enforced at the router via require_admin.
    """

    def __init__(self, kind: CatalogKind, repo: CatalogRepository | None = None):
        self.kind = kind
        self.repo = repo or CatalogRepository(kind.model)

    # ----- Helpers -----

    def _slug_for(
        self,
        session: Session,
        title: str,
        exclude_id: uuid.UUID | None = None,
    ) -> str:
        return unique_slug(
            title,
            lambda slug: self.repo.slug_holder(session, slug),
            exclude_id=exclude_id,
            fallback=self.kind.name,
        )

    def _ensure_title_free(
        self,
        session: Session,
        title: str,
        exclude_id: uuid.UUID | None = None,
    ) -> None:
        if self.repo.title_taken(session, title, exclude_id=exclude_id):
            raise ConflictError(f"{self.kind.title_label} already exists")

    def _commit(
        self,
        session: Session,
        record: CatalogRecord,
        stored: StoredAsset | None,
        assets: AssetStore,
        *,
        create: bool,
    ) -> CatalogRecord:
        """
        Persist `record`; on any failure drop the image stored for this request.
        """
        try:
            if create:
                return self.repo.create(session, record)
            return self.repo.update(session, record)
        except IntegrityError:
            session.rollback()
            if stored is not None:
                discard_asset(assets, stored.name)
            raise ConflictError("Slug already exists")
        except Exception:
            session.rollback()
            if stored is not None:
                discard_asset(assets, stored.name)
            raise

    # ----- Queries -----

    def list_items(self, session: Session) -> list[CatalogRecord]:
        return self.repo.list(session)

    def list_page(
        self,
        session: Session,
        page: int = 1,
        limit: int = MAX_PAGE_SIZE,
        flag: bool | None = None,
    ) -> tuple[list[CatalogRecord], dict[str, Any]]:
        """
        Newest-first page of records.

        - page is clamped to >= 1
        - limit is clamped to 1..MAX_PAGE_SIZE
        - flag filters on kind.filter_field when given
        """
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)
        filters = {}
        if flag is not None and self.kind.filter_field:
            filters[self.kind.filter_field] = flag

        items = self.repo.list(session, filters, skip=(page - 1) * limit, limit=limit)
        total = self.repo.count(session, filters)
        total_pages = math.ceil(total / limit)
        pagination = {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": total_pages,
            "has_next": page < total_pages,
            "has_prev": page > 1,
        }
        return items, pagination

    def get_by_slug(self, session: Session, slug: str) -> CatalogRecord:
        record = self.repo.get_by_slug(session, slug)
        if record is None:
            raise NotFoundError(f"{self.kind.label} not found")
        return record

    # ----- Commands -----

    def create(
        self,
        session: Session,
        assets: AssetStore,
        payload: ApiModel,
        image: ImageUpload,
        base_url: str,
    ) -> CatalogRecord:
        """
        Create a record with a unique slug and its image.

        Order:
          1. image type/size check (nothing stored yet)
          2. case-insensitive duplicate title => 409
          3. store image, derive slug, insert
        """
        ext = validate_image(image)
        fields = payload.model_dump()
        title = fields[self.kind.title_field]
        self._ensure_title_free(session, title)

        stored = assets.save(image.data, ext, base_url)
        try:
            slug = self._slug_for(session, title)
            record = self.kind.model(
                **fields,
                slug=slug,
                title_key=normalize_title(title),
                image_name=stored.name,
                image_url=stored.url,
            )
        except Exception:
            discard_asset(assets, stored.name)
            raise

        record = self._commit(session, record, stored, assets, create=True)
        logger.info("Created %s %s", self.kind.name, record.slug)
        return record

    def update_by_slug(
        self,
        session: Session,
        assets: AssetStore,
        slug: str,
        payload: ApiModel,
        image: ImageUpload | None,
        base_url: str,
    ) -> CatalogRecord:
        """
        Partial update.

        - Only fields present in the payload are applied.
        - A title change re-checks duplicates (excluding self) and
          regenerates the slug.
        - A new image replaces the old one; the old file is removed only
          after the row is saved.
        """
        record = self.get_by_slug(session, slug)
        ext = validate_image(image) if image is not None else None
        changes = payload.model_dump(exclude_unset=True)

        new_title = changes.pop(self.kind.title_field, None)
        if new_title is not None:
            self._ensure_title_free(session, new_title, exclude_id=record.id)
            new_slug = self._slug_for(session, new_title, exclude_id=record.id)
            setattr(record, self.kind.title_field, new_title)
            record.title_key = normalize_title(new_title)
            record.slug = new_slug

        for field, value in changes.items():
            setattr(record, field, value)

        stored = None
        old_image = record.image_name
        if image is not None:
            stored = assets.save(image.data, ext, base_url)
            record.image_name = stored.name
            record.image_url = stored.url

        record.updated_at = datetime.now(timezone.utc)
        record = self._commit(session, record, stored, assets, create=False)

        if stored is not None:
            discard_asset(assets, old_image)
        return record

    def delete_by_slug(
        self,
        session: Session,
        assets: AssetStore,
        slug: str,
    ) -> None:
        """
        Delete a record, then its image (best-effort).
        """
        record = self.get_by_slug(session, slug)
        image_name = record.image_name
        self.repo.delete(session, record)
        discard_asset(assets, image_name)
        logger.info("Deleted %s %s", self.kind.name, slug)
