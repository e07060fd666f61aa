# storefront/core/auth.py
import uuid
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from storefront.core.config import get_settings
from storefront.core.errors import AuthError, ForbiddenError
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.user_repo import UserRepository

# auto_error=False => a missing Authorization header resolves to a guest
# instead of failing inside HTTPBearer, so we control the 401 body.
bearer_scheme = HTTPBearer(auto_error=False)

user_repo = UserRepository()


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a bearer access token (JWT).

    Verification:
      - signature (JWT_ALG using JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified

    Raises:
        AuthError(401): if token is invalid/expired.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise AuthError("Invalid or expired token")


def _default_name_from_email(email: str) -> str:
    if "@" in email:
        return email.split("@", 1)[0]
    return email


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Resolve the current user from a bearer JWT.

    Flow:
      1. No Authorization header => guest => None.
      2. Decode JWT => 'sub' (user id) and 'email'.
      3. Load the profile row, auto-provisioning it with role "user".
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")
    email = payload.get("email")

    if not sub or not email:
        raise AuthError("Token missing sub/email")

    try:
        sub_uuid = uuid.UUID(str(sub))
    except ValueError:
        raise AuthError("Invalid sub in token")

    user = user_repo.get_by_id(session, sub_uuid)
    if user is None:
        user = user_repo.create(
            session,
            User(
                id=sub_uuid,
                email=email,
                name=_default_name_from_email(email)[:50],
                role="user",
            ),
        )
    return user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    Raises:
        AuthError(401): guest request.
    """
    if user is None:
        raise AuthError("No token provided")
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Enforce admin role (catalog writes).

    Raises:
        ForbiddenError(403): if role is not admin.
    """
    if user.role != "admin":
        raise ForbiddenError("Forbidden: insufficient role")
    return user
