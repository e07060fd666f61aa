# storefront/routers/users.py
from fastapi import APIRouter, Depends

from storefront.core.auth import require_auth
from storefront.models.user import User
from storefront.schemas.common import DataResponse
from storefront.schemas.user import UserRead

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=DataResponse[UserRead])
def read_me(current_user: User = Depends(require_auth)):
    """
    Return the authenticated user's profile.

    The row is auto-created on the first authenticated request.
    """
    return DataResponse[UserRead](data=UserRead.model_validate(current_user))
