"""Tests for the asset store and orphan cleanup around catalog writes."""

import pytest

from storefront.core.errors import ConflictError, ValidationError
from storefront.core.storage_utils import (
    ImageUpload,
    LocalAssetStore,
    discard_asset,
    validate_image,
    MAX_IMAGE_BYTES,
)
from storefront.schemas.catalog import ProductCreate
from storefront.services.catalog_kinds import PRODUCT
from storefront.services.catalog_service import CatalogService

PNG = ImageUpload(content_type="image/png", data=b"\x89PNG" + b"\x00" * 16)


class TestLocalAssetStore:
    def test_save_and_delete(self, tmp_path):
        store = LocalAssetStore(tmp_path / "up", "uploads/")
        asset = store.save(b"data", "png", "http://shop.test/")
        assert asset.name.endswith(".png")
        assert asset.url == f"http://shop.test/uploads/{asset.name}"
        assert (tmp_path / "up" / asset.name).read_bytes() == b"data"

        store.delete(asset.name)
        assert not (tmp_path / "up" / asset.name).exists()

    def test_delete_cannot_escape_root(self, tmp_path):
        outside = tmp_path / "keep.txt"
        outside.write_text("x")
        store = LocalAssetStore(tmp_path / "up")
        store.delete("../keep.txt")
        assert outside.exists()


class TestDiscardAsset:
    def test_errors_are_swallowed(self):
        class Broken:
            def delete(self, name):
                raise OSError("disk gone")

        discard_asset(Broken(), "a.png")

    def test_empty_name_is_noop(self):
        class Recorder:
            calls = []

            def delete(self, name):
                self.calls.append(name)

        store = Recorder()
        discard_asset(store, None)
        assert store.calls == []


class TestValidateImage:
    def test_extension_from_content_type(self):
        assert validate_image(PNG) == "png"
        assert validate_image(ImageUpload("image/jpeg", b"x")) == "jpg"

    @pytest.mark.parametrize(
        "image",
        [
            ImageUpload("application/pdf", b"x"),
            ImageUpload("image/png", b""),
            ImageUpload("image/png", b"x" * (MAX_IMAGE_BYTES + 1)),
        ],
    )
    def test_rejected(self, image):
        with pytest.raises(ValidationError):
            validate_image(image)


class TestCreateCleanup:
    """A stored image never outlives a failed create."""

    def payload(self, title="Red Shirt"):
        return ProductCreate.model_validate({"title": title, "price": "10", "description": "d"})

    def test_slug_race_maps_to_conflict_and_drops_image(self, session, assets):
        service = CatalogService(PRODUCT)
        service.create(session, assets, self.payload("Red Shirt"), PNG, "http://t/")

        # Simulate a concurrent writer: the probe sees nothing, the unique index does.
        service.repo.slug_holder = lambda _session, _slug: None
        with pytest.raises(ConflictError):
            service.create(session, assets, self.payload("Red-Shirt"), PNG, "http://t/")

        assert len(list(assets.root.iterdir())) == 1

    def test_unexpected_store_error_drops_image(self, session, assets, monkeypatch):
        service = CatalogService(PRODUCT)

        def boom(_session, _record):
            raise RuntimeError("db down")

        monkeypatch.setattr(service.repo, "create", boom)
        with pytest.raises(RuntimeError):
            service.create(session, assets, self.payload(), PNG, "http://t/")

        assert list(assets.root.iterdir()) == []
