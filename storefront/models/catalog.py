# storefront/models/catalog.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON
from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_title(text: str) -> str:
    return text.strip().casefold()


class CatalogRecord(SQLModel):
    """
    Columns shared by every catalog entity kind.

    - slug: unique per table; the unique index is the source of truth,
      the service-level probe only avoids the common collision.
    - title_key: casefolded title/heading, the duplicate-title check key.
    - image_name / image_url: the one image owned by the record.
    """

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    slug: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique, lowercase)",
    )

    title_key: str = Field(default="", max_length=255, index=True)

    image_url: str = Field(description="Public URL of the stored image")
    image_name: str = Field(description="Key of the image inside the asset store")

    created_at: datetime = Field(default_factory=_utcnow, index=True)
    updated_at: datetime = Field(default_factory=_utcnow)


class Product(CatalogRecord, table=True):
    """
    Storefront product.

    Cart lines snapshot title/price/image/slug from here at add-time.
    """

    __tablename__ = "products"

    sub: str = Field(default="", description="Sub-category or subtitle")
    title: str = Field(max_length=255, index=True)
    price: float = Field(ge=0)
    sizes: list[str] = Field(default_factory=list, sa_type=JSON)
    description: str
    is_best_selling: bool = Field(default=False, index=True)


class Feature(CatalogRecord, table=True):
    """Featured item block (same shape as a product, no best-selling flag)."""

    __tablename__ = "features"

    sub: str = Field(default="")
    title: str = Field(max_length=255, index=True)
    price: float = Field(ge=0)
    sizes: list[str] = Field(default_factory=list, sa_type=JSON)
    description: str


class Trending(CatalogRecord, table=True):
    """Homepage "trending" banner."""

    __tablename__ = "trending"

    heading: str = Field(max_length=255, index=True)
    subheading: str
    btn_text: str


class MostSales(CatalogRecord, table=True):
    """Homepage "most sales" promotional banner."""

    __tablename__ = "most_sales"

    heading: str = Field(max_length=255, index=True)
    subheading: str
    btn_text: str
