# storefront/repositories/cart_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from storefront.models.cart import Cart, CartItem


class CartRepository:

    # ----- Cart -----

    def get_for_user(self, session: Session, user_id: uuid.UUID) -> Cart | None:
        stmt = select(Cart).where(Cart.user_id == user_id)
        return session.exec(stmt).first()

    def create_for_user(self, session: Session, user_id: uuid.UUID) -> Cart:
        cart = Cart(user_id=user_id)
        session.add(cart)
        session.commit()
        session.refresh(cart)
        return cart

    # ----- Lines -----

    def list_items(self, session: Session, cart_id: uuid.UUID) -> list[CartItem]:
        stmt = (
            select(CartItem)
            .where(CartItem.cart_id == cart_id)
            .order_by(CartItem.position)
        )
        return list(session.exec(stmt).all())

    def get_item(self, session: Session, cart_id: uuid.UUID, item_id: uuid.UUID) -> CartItem | None:
        stmt = select(CartItem).where(CartItem.cart_id == cart_id, CartItem.id == item_id)
        return session.exec(stmt).first()

    def find_line(
        self,
        session: Session,
        cart_id: uuid.UUID,
        product_id: uuid.UUID,
        size: str,
    ) -> CartItem | None:
        stmt = select(CartItem).where(
            CartItem.cart_id == cart_id,
            CartItem.product_id == product_id,
            CartItem.size == size,
        )
        return session.exec(stmt).first()

    def next_position(self, session: Session, cart_id: uuid.UUID) -> int:
        stmt = select(func.max(CartItem.position)).where(CartItem.cart_id == cart_id)
        current = session.exec(stmt).one()
        return 0 if current is None else current + 1

    # CRUD
    def save_item(self, session: Session, item: CartItem) -> CartItem:
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def delete_item(self, session: Session, item: CartItem) -> None:
        session.delete(item)
        session.commit()

    def clear(self, session: Session, cart_id: uuid.UUID) -> None:
        for row in self.list_items(session, cart_id):
            session.delete(row)
        session.commit()
