# storefront/schemas/catalog.py
"""
Request/response models for the catalog kinds.

Multipart forms arrive as strings, so this module is the single place where
they are turned into typed values:
  - text fields are stripped; required ones must be non-empty
  - price must be a finite number >= 0
  - sizes accepts a list, a JSON array string or "S,M,L"
  - isBestSelling accepts "true"/"false"
Services receive already-validated models and never re-check them.
"""
import json
import uuid
from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from storefront.schemas.common import ApiModel


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


def _parse_sizes(v: Any) -> list[str]:
    if v is None:
        return []
    if isinstance(v, str):
        raw = v.strip()
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            v = parsed
        else:
            v = raw.split(",")
    if not isinstance(v, (list, tuple)):
        raise ValueError("sizes must be a list or a comma-separated string")
    return [str(s).strip() for s in v if str(s).strip()]


class CatalogWrite(ApiModel):
    model_config = ConfigDict(extra="ignore")


# ----- Product / Feature -----


class _PricedItemFields(CatalogWrite):
    @field_validator("sizes", mode="before", check_fields=False)
    @classmethod
    def normalize_sizes(cls, v: Any) -> list[str] | None:
        return _parse_sizes(v)

    @field_validator("sub", check_fields=False)
    @classmethod
    def strip_sub(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v


class FeatureCreate(_PricedItemFields):
    sub: str = ""
    title: str = Field(max_length=255)
    price: float = Field(ge=0, allow_inf_nan=False)
    description: str
    sizes: list[str] = Field(default_factory=list)

    @field_validator("title", "description")
    @classmethod
    def required_text(cls, v: str) -> str:
        return _strip_required(v)


class FeatureUpdate(_PricedItemFields):
    """Partial update: only fields present in the form are applied."""

    sub: str | None = None
    title: str | None = Field(default=None, max_length=255)
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    description: str | None = None
    sizes: list[str] | None = None

    @field_validator("title", "description")
    @classmethod
    def required_text(cls, v: str | None) -> str | None:
        return _strip_required(v) if v is not None else v


class ProductCreate(FeatureCreate):
    is_best_selling: bool = False


class ProductUpdate(FeatureUpdate):
    is_best_selling: bool | None = None


class FeatureRead(ApiModel):
    id: uuid.UUID
    slug: str
    sub: str
    title: str
    price: float
    sizes: list[str]
    description: str
    image_url: str
    image_name: str
    created_at: datetime
    updated_at: datetime


class ProductRead(FeatureRead):
    is_best_selling: bool


# ----- Trending / Most-Sales banners -----


class BannerCreate(CatalogWrite):
    heading: str = Field(max_length=255)
    subheading: str
    btn_text: str

    @field_validator("heading", "subheading", "btn_text")
    @classmethod
    def required_text(cls, v: str) -> str:
        return _strip_required(v)


class BannerUpdate(CatalogWrite):
    heading: str | None = Field(default=None, max_length=255)
    subheading: str | None = None
    btn_text: str | None = None

    @field_validator("heading", "subheading", "btn_text")
    @classmethod
    def required_text(cls, v: str | None) -> str | None:
        return _strip_required(v) if v is not None else v


class BannerRead(ApiModel):
    id: uuid.UUID
    slug: str
    heading: str
    subheading: str
    btn_text: str
    image_url: str
    image_name: str
    created_at: datetime
    updated_at: datetime
