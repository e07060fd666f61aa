# storefront/repositories/user_repo.py
import uuid

from sqlmodel import Session

from storefront.models.user import User


class UserRepository:
    """Data access for user profiles."""

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        return session.get(User, user_id)

    def create(self, session: Session, user: User) -> User:
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
