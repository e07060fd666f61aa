# storefront/services/catalog_kinds.py
from dataclasses import dataclass

from storefront.models.catalog import CatalogRecord, Feature, MostSales, Product, Trending
from storefront.schemas.catalog import (
    BannerCreate,
    BannerRead,
    BannerUpdate,
    FeatureCreate,
    FeatureRead,
    FeatureUpdate,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from storefront.schemas.common import ApiModel


@dataclass(frozen=True)
class CatalogKind:
    """
    Describes one catalog entity kind so a single service/router
    implementation can serve all of them.

    title_field:  display field the slug is derived from and that must be
                  unique (case-insensitive)
    filter_field: boolean column exposed as a list filter (paginated kinds)
    """

    name: str
    label: str
    path: str
    model: type[CatalogRecord]
    title_field: str
    create_schema: type[ApiModel]
    update_schema: type[ApiModel]
    read_schema: type[ApiModel]
    paginated: bool = False
    filter_field: str | None = None
    filter_param: str | None = None

    @property
    def title_label(self) -> str:
        return self.title_field.capitalize()


PRODUCT = CatalogKind(
    name="product",
    label="Product",
    path="/product",
    model=Product,
    title_field="title",
    create_schema=ProductCreate,
    update_schema=ProductUpdate,
    read_schema=ProductRead,
    paginated=True,
    filter_field="is_best_selling",
    filter_param="bestSelling",
)

FEATURE = CatalogKind(
    name="feature",
    label="Feature",
    path="/features",
    model=Feature,
    title_field="title",
    create_schema=FeatureCreate,
    update_schema=FeatureUpdate,
    read_schema=FeatureRead,
)

TRENDING = CatalogKind(
    name="trending",
    label="Trending item",
    path="/trending",
    model=Trending,
    title_field="heading",
    create_schema=BannerCreate,
    update_schema=BannerUpdate,
    read_schema=BannerRead,
)

MOST_SALES = CatalogKind(
    name="most-sales",
    label="Most Sales item",
    path="/most-sales",
    model=MostSales,
    title_field="heading",
    create_schema=BannerCreate,
    update_schema=BannerUpdate,
    read_schema=BannerRead,
)

CATALOG_KINDS: tuple[CatalogKind, ...] = (PRODUCT, TRENDING, MOST_SALES, FEATURE)
