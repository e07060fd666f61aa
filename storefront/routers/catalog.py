# storefront/routers/catalog.py
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session
from starlette.datastructures import UploadFile

from storefront.core.auth import require_admin
from storefront.core.errors import ValidationError
from storefront.core.storage_utils import AssetStore, ImageUpload, get_asset_store
from storefront.database import get_session
from storefront.schemas.common import (
    ApiModel,
    DataResponse,
    MessageResponse,
    PageResponse,
    Pagination,
)
from storefront.services.catalog_kinds import CatalogKind
from storefront.services.catalog_service import MAX_PAGE_SIZE, CatalogService

IMAGE_FIELD = "image"


@dataclass
class CatalogForm:
    """Multipart body split into text fields and the optional image part."""

    fields: dict[str, Any]
    image: ImageUpload | None
    base_url: str


async def read_catalog_form(request: Request) -> CatalogForm:
    """
    Pull text fields and the `image` file out of a multipart/urlencoded body.

    Repeated text fields (sizes=S&sizes=M) are kept as a list.
    An empty file part (no filename) counts as "no image".
    """
    form = await request.form()
    fields: dict[str, Any] = {}
    image: ImageUpload | None = None

    for key in form.keys():
        values = form.getlist(key)
        if key == IMAGE_FIELD:
            upload = values[-1]
            if isinstance(upload, UploadFile) and upload.filename:
                image = ImageUpload(
                    content_type=upload.content_type or "",
                    data=await upload.read(),
                )
            continue
        texts = [v for v in values if isinstance(v, str)]
        if not texts:
            continue
        fields[key] = texts if len(texts) > 1 else texts[0]

    return CatalogForm(fields=fields, image=image, base_url=str(request.base_url))


def format_validation_error(exc: PydanticValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
    msg = err.get("msg", "Invalid value")
    return f"{loc}: {msg}" if loc else msg


def parse_form(schema: type[ApiModel], fields: dict[str, Any]) -> ApiModel:
    """Boundary step: raw form strings -> validated schema instance."""
    try:
        return schema.model_validate(fields)
    except PydanticValidationError as exc:
        raise ValidationError(format_validation_error(exc))


def build_catalog_router(kind: CatalogKind) -> APIRouter:
    """
    Slug-addressed CRUD router for one catalog kind.

    Public:  GET /, GET /{slug}
    Admin:   POST /, PUT /{slug}, DELETE /{slug}
    """
    router = APIRouter(prefix=kind.path, tags=[kind.label])
    service = CatalogService(kind)
    read = kind.read_schema

    def to_read(record) -> ApiModel:
        return read.model_validate(record)

    # -------- Public endpoints --------

    if kind.paginated:

        @router.get("", response_model=PageResponse[read])
        def list_items(
            session: Session = Depends(get_session),
            page: int = 1,
            limit: int = MAX_PAGE_SIZE,
            flag: bool | None = Query(default=None, alias=kind.filter_param),
        ):
            """
            List newest first, paginated (max 9 per page), optional flag filter.
            """
            items, pagination = service.list_page(session, page=page, limit=limit, flag=flag)
            return PageResponse[read](
                data=[to_read(r) for r in items],
                pagination=Pagination(**pagination),
            )

    else:

        @router.get("", response_model=DataResponse[list[read]])
        def list_items(session: Session = Depends(get_session)):
            """List every record, newest first."""
            return DataResponse[list[read]](data=[to_read(r) for r in service.list_items(session)])

    @router.get("/{slug}", response_model=DataResponse[read])
    def get_item(slug: str, session: Session = Depends(get_session)):
        """Fetch one record by slug (case-insensitive)."""
        return DataResponse[read](data=to_read(service.get_by_slug(session, slug)))

    # -------- Admin endpoints --------

    @router.post(
        "",
        response_model=DataResponse[read],
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(require_admin)],
    )
    def create_item(
        form: CatalogForm = Depends(read_catalog_form),
        session: Session = Depends(get_session),
        assets: AssetStore = Depends(get_asset_store),
    ):
        """
        Create a record from a multipart form; `image` file is required.
        """
        if form.image is None:
            raise ValidationError("Image is required")
        payload = parse_form(kind.create_schema, form.fields)
        record = service.create(session, assets, payload, form.image, form.base_url)
        return DataResponse[read](message=f"{kind.label} created", data=to_read(record))

    @router.put(
        "/{slug}",
        response_model=DataResponse[read],
        dependencies=[Depends(require_admin)],
    )
    def update_item(
        slug: str,
        form: CatalogForm = Depends(read_catalog_form),
        session: Session = Depends(get_session),
        assets: AssetStore = Depends(get_asset_store),
    ):
        """
        Partial update; fields left out of the form keep their value.
        """
        payload = parse_form(kind.update_schema, form.fields)
        record = service.update_by_slug(session, assets, slug, payload, form.image, form.base_url)
        return DataResponse[read](message=f"{kind.label} updated", data=to_read(record))

    @router.delete(
        "/{slug}",
        response_model=MessageResponse,
        dependencies=[Depends(require_admin)],
    )
    def delete_item(
        slug: str,
        session: Session = Depends(get_session),
        assets: AssetStore = Depends(get_asset_store),
    ):
        """Delete a record and its image."""
        service.delete_by_slug(session, assets, slug)
        return MessageResponse(message=f"{kind.label} deleted")

    return router
