# storefront/core/storage_utils.py
import logging
import uuid
from functools import lru_cache
from pathlib import Path
from typing import NamedTuple, Protocol

from storefront.core.config import get_settings
from storefront.core.errors import ValidationError
from storefront.core.supabase_client import supabase_admin

logger = logging.getLogger(__name__)

# --- Image config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


class ImageUpload(NamedTuple):
    """Raw image part pulled off a multipart request."""

    content_type: str
    data: bytes


class StoredAsset(NamedTuple):
    """
    Reference to a stored file.

    name: key inside the store (used for deletion)
    url:  public URL handed to clients
    """

    name: str
    url: str


class AssetStore(Protocol):
    def save(self, data: bytes, ext: str, base_url: str) -> StoredAsset: ...

    def delete(self, name: str) -> None: ...


def generate_filename(ext: str) -> str:
    """
    Generate a random filename using UUID4.

    Args:
        ext: File extension without dot (e.g. "png", "jpg")

    Returns:
        A filename like "<uuid4>.png"
    """
    return f"{uuid.uuid4()}.{ext}"


def validate_image(image: ImageUpload) -> str:
    """
    Check content type + size and return the file extension to store under.

    Raises:
        ValidationError(400): unsupported type, empty or oversized file.
    """
    ext = ALLOWED_IMAGE_CONTENT_TYPES.get(image.content_type)
    if ext is None:
        raise ValidationError("Unsupported image type. Allowed: JPEG, PNG, WEBP, GIF.")
    if not image.data:
        raise ValidationError("Image file is empty")
    if len(image.data) > MAX_IMAGE_BYTES:
        raise ValidationError("Image too large (max 5MB).")
    return ext


class LocalAssetStore:
    """
    Flat upload directory on local disk.

    Files are served by the app under `url_path` (see main.py), so the
    public URL is built from the request's base URL.
    """

    def __init__(self, root: str | Path, url_path: str = "/uploads"):
        self.root = Path(root)
        self.url_path = "/" + url_path.strip("/")

    def save(self, data: bytes, ext: str, base_url: str) -> StoredAsset:
        self.root.mkdir(parents=True, exist_ok=True)
        name = generate_filename(ext)
        (self.root / name).write_bytes(data)
        return StoredAsset(name=name, url=f"{base_url.rstrip('/')}{self.url_path}/{name}")

    def delete(self, name: str) -> None:
        # Names are generated by us; never follow a path out of the root.
        (self.root / Path(name).name).unlink(missing_ok=True)


class SupabaseAssetStore:
    """
    Supabase Storage bucket.

    Object path pattern:
        <prefix>/<uuid4>.<ext>
    """

    def __init__(self, bucket: str, prefix: str = "catalog"):
        self.client = supabase_admin()
        self.bucket = bucket
        self.prefix = prefix.strip("/")

    def save(self, data: bytes, ext: str, base_url: str) -> StoredAsset:
        name = f"{self.prefix}/{generate_filename(ext)}"
        self.client.storage.from_(self.bucket).upload(name, data, {"upsert": "true"})
        return StoredAsset(name=name, url=self.client.storage.from_(self.bucket).get_public_url(name))

    def delete(self, name: str) -> None:
        # Supabase Python client expects a list of paths.
        self.client.storage.from_(self.bucket).remove([name])


def discard_asset(store: AssetStore, name: str | None) -> None:
    """
    Fire-and-forget deletion.

    A failed delete leaves an orphaned file, never a broken record, so the
    error is logged and dropped.
    """
    if not name:
        return
    try:
        store.delete(name)
    except Exception:
        logger.warning("Could not delete stored asset %s", name, exc_info=True)


@lru_cache
def get_asset_store() -> AssetStore:
    """
    FastAPI dependency returning the configured asset backend.

    Tests override this with a LocalAssetStore rooted in a temp dir.
    """
    settings = get_settings()
    if settings.ASSET_BACKEND == "supabase":
        return SupabaseAssetStore(settings.SUPABASE_BUCKET)
    return LocalAssetStore(settings.UPLOAD_DIR, settings.UPLOAD_URL_PATH)
