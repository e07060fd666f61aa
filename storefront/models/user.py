# storefront/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Identity seen in a verified bearer token, plus its storefront role.

    id is the token's "sub"; role is "user" or "admin" (admins are promoted
    out of band). Carts hang off this row.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(primary_key=True)
    email: str = Field(unique=True, index=True)
    name: str = Field(max_length=50)
    role: str = Field(default="user")

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
