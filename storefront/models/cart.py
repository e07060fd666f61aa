# storefront/models/cart.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Cart(SQLModel, table=True):
    """
    One cart per user, created lazily on the first add.

    Clearing a cart removes its lines but keeps this row.
    """

    __tablename__ = "carts"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        unique=True,
        index=True,
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class CartItem(SQLModel, table=True):
    """
    Line item inside a cart.

    Identity for merging is (product_id, size). product_id is a reference,
    not a foreign key: deleting a product leaves existing snapshots alone.
    """

    __tablename__ = "cart_items"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    cart_id: uuid.UUID = Field(
        foreign_key="carts.id",
        index=True,
    )

    product_id: uuid.UUID = Field(index=True)

    # Snapshot taken when the line was created
    slug: str
    title: str
    image_url: str | None = None
    price: float = Field(ge=0, description="Price when added to cart")

    size: str = Field(default="", description='"" means no size chosen')

    qty: int = Field(
        gt=0,
        description="Must be >= 1",
    )

    # Display order inside the cart
    position: int = Field(default=0)
