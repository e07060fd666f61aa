# storefront/routers/cart.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from storefront.core.auth import require_auth
from storefront.database import get_session
from storefront.models.catalog import Product
from storefront.models.user import User
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.catalog_repo import CatalogRepository
from storefront.schemas.cart import CartItemAdd, CartItemUpdate, CartResponse
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
product_repo = CatalogRepository(Product)
service = CartService(cart_repo, product_repo)


@router.post("/add", response_model=CartResponse)
def add_to_cart(
    payload: CartItemAdd,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Add a product (productId or slug) to the current user's cart.

    Returns the updated cart with totals.
    """
    return service.add_item(session, current_user.id, payload)


@router.get("", response_model=CartResponse)
def get_my_cart(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Get current user's cart (empty if nothing was added yet).
    """
    return service.get_cart(session, current_user.id)


@router.patch("/item/{item_id}", response_model=CartResponse)
def update_cart_item(
    item_id: uuid.UUID,
    payload: CartItemUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Update qty and/or size of a cart line.
    """
    return service.update_item(session, current_user.id, item_id, payload)


@router.delete("/item/{item_id}", response_model=CartResponse)
def remove_cart_item(
    item_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.remove_item(session, current_user.id, item_id)


@router.post("/clear", response_model=CartResponse)
def clear_cart(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Empty the cart. Returns the (now empty) cart.
    """
    return service.clear_cart(session, current_user.id)
