"""Shared pytest fixtures for the storefront API tests."""

import os
import tempfile
import uuid
from datetime import datetime, timedelta, timezone

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ASSET_BACKEND", "local")
os.environ.setdefault("UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "storefront-test-uploads"))

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlmodel import Session, SQLModel

from storefront.core.storage_utils import LocalAssetStore, get_asset_store
from storefront.database import get_session, make_engine
from storefront.main import app
from storefront.models.user import User

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = make_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def assets(tmp_path):
    return LocalAssetStore(tmp_path / "uploads", "/uploads")


@pytest.fixture
def client(engine, assets):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_asset_store] = lambda: assets
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_token(user_id: uuid.UUID, email: str, expires_in: int = 3600) -> str:
    payload = {
        "sub": str(user_id),
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, os.environ["JWT_SECRET"], algorithm="HS256")


@pytest.fixture
def user_headers():
    """Bearer header for a customer (row auto-provisioned on first use)."""
    return {"Authorization": f"Bearer {make_token(uuid.uuid4(), 'shopper@example.com')}"}


@pytest.fixture
def admin_headers(session):
    """Bearer header for a user promoted to admin."""
    admin = User(id=uuid.uuid4(), email="admin@example.com", name="admin", role="admin")
    session.add(admin)
    session.commit()
    return {"Authorization": f"Bearer {make_token(admin.id, admin.email)}"}


def image_file(content_type: str = "image/png", data: bytes = PNG_BYTES):
    return {"image": ("photo.png", data, content_type)}


@pytest.fixture
def create_product(client, admin_headers):
    """POST a product through the API and return the created record."""

    def _create(title="Red Shirt", price="1000", sizes="S,M", **extra):
        form = {"title": title, "price": price, "description": "Cotton", "sizes": sizes, **extra}
        res = client.post("/api/product", data=form, files=image_file(), headers=admin_headers)
        assert res.status_code == 201, res.json()
        return res.json()["data"]

    return _create


@pytest.fixture
def other_user_headers():
    return {"Authorization": f"Bearer {make_token(uuid.uuid4(), 'someone@example.com')}"}
