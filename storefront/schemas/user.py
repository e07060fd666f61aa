# storefront/schemas/user.py
import uuid
from datetime import datetime
from typing import Literal

from storefront.schemas.common import ApiModel

# App-level roles. "guest" = no token, so we don't store it here.
Role = Literal["user", "admin"]


class UserRead(ApiModel):
    """Response schema returned to clients."""

    id: uuid.UUID
    email: str
    name: str
    role: Role
    created_at: datetime
