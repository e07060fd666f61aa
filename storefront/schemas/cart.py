# storefront/schemas/cart.py
import uuid

from pydantic import Field, model_validator

from storefront.schemas.common import ApiModel

# Per-line quantity ceiling
MAX_LINE_QTY = 999


class CartItemAdd(ApiModel):
    """
    Payload for POST /cart/add.

    Exactly one way to point at the product is needed: productId or slug.
    """

    product_id: uuid.UUID | None = None
    slug: str | None = None
    qty: int = Field(default=1, ge=1, le=MAX_LINE_QTY)
    size: str = ""

    @model_validator(mode="after")
    def product_reference_required(self) -> "CartItemAdd":
        if self.product_id is None and not (self.slug and self.slug.strip()):
            raise ValueError("productId or slug is required")
        self.size = self.size.strip()
        return self


class CartItemUpdate(ApiModel):
    """
    Payload for PATCH /cart/item/{itemId}. Omitted fields are untouched.
    """

    qty: int | None = Field(default=None, ge=1, le=MAX_LINE_QTY)
    size: str | None = None


class CartItemRead(ApiModel):
    id: uuid.UUID
    product_id: uuid.UUID
    slug: str
    title: str
    image_url: str | None = None
    price: float
    size: str
    qty: int
    line_total: float


class CartRead(ApiModel):
    """
    id is None for the synthetic empty cart returned before the first add.
    """

    id: uuid.UUID | None = None
    user_id: uuid.UUID
    items: list[CartItemRead]


class CartResponse(ApiModel):
    success: bool = True
    cart: CartRead
    total_items: int
    subtotal: float
