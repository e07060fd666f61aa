# storefront/services/cart_service.py
import uuid
from typing import Iterable

from sqlmodel import Session

from storefront.core.errors import NotFoundError, ValidationError
from storefront.models.cart import Cart, CartItem
from storefront.models.catalog import Product
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.catalog_repo import CatalogRepository
from storefront.schemas.cart import (
    MAX_LINE_QTY,
    CartItemAdd,
    CartItemRead,
    CartItemUpdate,
    CartRead,
    CartResponse,
)


def compute_totals(items: Iterable[CartItem]) -> tuple[int, float]:
    """
    (total_items, subtotal) for a list of lines.

    Derived on every read, never stored.
    """
    total_items = 0
    subtotal = 0.0
    for it in items:
        total_items += it.qty
        subtotal += it.qty * it.price
    return total_items, subtotal


def _size_allowed(product: Product, size: str) -> bool:
    return not size or not product.sizes or size in product.sizes


class CartService:
    """
    Business logic for the per-user cart.

    Rules:
      - lines merge on (product, size): re-adding bumps qty
      - title/price/image/slug are snapshotted when a line is created
      - a size must be one of the product's sizes when both are non-empty
      - totals are recomputed from the lines on every response
    """

    def __init__(self, cart_repo: CartRepository, product_repo: CatalogRepository[Product]):
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    # ---- internal helpers ----

    def _resolve_product(self, session: Session, payload: CartItemAdd) -> Product:
        if payload.product_id is not None:
            product = self.product_repo.get_by_id(session, payload.product_id)
        else:
            product = self.product_repo.get_by_slug(session, payload.slug)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def _require_cart(self, session: Session, user_id: uuid.UUID) -> Cart:
        cart = self.cart_repo.get_for_user(session, user_id)
        if cart is None:
            raise NotFoundError("Cart not found")
        return cart

    def _require_item(self, session: Session, cart: Cart, item_id: uuid.UUID) -> CartItem:
        item = self.cart_repo.get_item(session, cart.id, item_id)
        if item is None:
            raise NotFoundError("Item not found")
        return item

    def _summary(self, session: Session, user_id: uuid.UUID, cart: Cart | None) -> CartResponse:
        items = self.cart_repo.list_items(session, cart.id) if cart is not None else []
        total_items, subtotal = compute_totals(items)
        return CartResponse(
            cart=CartRead(
                id=cart.id if cart is not None else None,
                user_id=user_id,
                items=[
                    CartItemRead(
                        id=it.id,
                        product_id=it.product_id,
                        slug=it.slug,
                        title=it.title,
                        image_url=it.image_url,
                        price=it.price,
                        size=it.size,
                        qty=it.qty,
                        line_total=it.qty * it.price,
                    )
                    for it in items
                ],
            ),
            total_items=total_items,
            subtotal=subtotal,
        )

    # ---- public operations ----

    def get_cart(self, session: Session, user_id: uuid.UUID) -> CartResponse:
        """
        Current cart, or an empty one. Never creates a cart row.
        """
        cart = self.cart_repo.get_for_user(session, user_id)
        return self._summary(session, user_id, cart)

    def add_item(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: CartItemAdd,
    ) -> CartResponse:
        """
        Add a product (by id or slug) to the user's cart.

        - same product + same size => qty += payload.qty
        - otherwise a new line with a snapshot of the product
        """
        product = self._resolve_product(session, payload)

        if not _size_allowed(product, payload.size):
            raise ValidationError("Invalid size selection")

        cart = self.cart_repo.get_for_user(session, user_id)
        if cart is None:
            cart = self.cart_repo.create_for_user(session, user_id)

        existing = self.cart_repo.find_line(session, cart.id, product.id, payload.size)
        if existing is not None:
            if existing.qty + payload.qty > MAX_LINE_QTY:
                raise ValidationError(f"Quantity cannot exceed {MAX_LINE_QTY} per line")
            existing.qty += payload.qty
            self.cart_repo.save_item(session, existing)
        else:
            item = CartItem(
                cart_id=cart.id,
                product_id=product.id,
                slug=product.slug,
                title=product.title,
                image_url=product.image_url,
                price=product.price,  # snapshot; repricing is not done here
                size=payload.size,
                qty=payload.qty,
                position=self.cart_repo.next_position(session, cart.id),
            )
            self.cart_repo.save_item(session, item)

        return self._summary(session, user_id, cart)

    def update_item(
        self,
        session: Session,
        user_id: uuid.UUID,
        item_id: uuid.UUID,
        payload: CartItemUpdate,
    ) -> CartResponse:
        """
        Change qty and/or size of one line.

        qty is validated (>= 1) by the payload model. A new size is checked
        against the product the line points at, if that product still exists.
        """
        cart = self._require_cart(session, user_id)
        item = self._require_item(session, cart, item_id)

        size = None
        if payload.size is not None:
            size = payload.size.strip()
            product = self.product_repo.get_by_id(session, item.product_id)
            if product is not None and not _size_allowed(product, size):
                raise ValidationError("Invalid size selection")

        if payload.qty is not None:
            item.qty = payload.qty
        if size is not None:
            item.size = size

        self.cart_repo.save_item(session, item)
        return self._summary(session, user_id, cart)

    def remove_item(
        self,
        session: Session,
        user_id: uuid.UUID,
        item_id: uuid.UUID,
    ) -> CartResponse:
        cart = self._require_cart(session, user_id)
        item = self._require_item(session, cart, item_id)
        self.cart_repo.delete_item(session, item)
        return self._summary(session, user_id, cart)

    def clear_cart(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> CartResponse:
        """
        Remove every line. The cart row stays; a missing cart is not created.
        """
        cart = self.cart_repo.get_for_user(session, user_id)
        if cart is not None:
            self.cart_repo.clear(session, cart.id)
        return self._summary(session, user_id, cart)
