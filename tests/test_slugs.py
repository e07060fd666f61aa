"""Tests for slug derivation and collision handling."""

import re
import uuid

import pytest

from storefront.core.slugs import slugify, unique_slug

SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


class TestSlugify:
    """Normalisation of free text into slugs."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Red Shirt", "red-shirt"),
            ("  Men's  \"Best\" Jacket!! ", "mens-best-jacket"),
            ("--Summer__Sale--2024--", "summer-sale-2024"),
            ("ÄÖÜ Deal", "deal"),
        ],
    )
    def test_normalises_text(self, raw, expected):
        assert slugify(raw) == expected

    def test_empty_result_uses_fallback(self):
        """Text without any alphanumerics falls back to the given token."""
        assert slugify("!!! ???", fallback="product") == "product"
        assert slugify("") == "item"

    @pytest.mark.parametrize("raw", ["A/B c", "'quoted'", "x__y", "  trailing-  ", "Crème brûlée"])
    def test_output_charset(self, raw):
        slug = slugify(raw)
        assert SLUG_RE.match(slug)


class TestUniqueSlug:
    """Probing the store for collisions."""

    def test_free_slug_is_returned_as_is(self):
        assert unique_slug("Red Shirt", lambda s: None) == "red-shirt"

    def test_collisions_get_increasing_suffixes(self):
        taken = {"red-shirt": uuid.uuid4(), "red-shirt-2": uuid.uuid4()}
        assert unique_slug("Red Shirt", taken.get) == "red-shirt-3"

    def test_record_may_keep_its_own_slug(self):
        own = uuid.uuid4()
        taken = {"red-shirt": own}
        assert unique_slug("Red Shirt", taken.get, exclude_id=own) == "red-shirt"

    def test_exclude_only_applies_to_matching_holder(self):
        own = uuid.uuid4()
        taken = {"red-shirt": uuid.uuid4(), "red-shirt-2": own}
        assert unique_slug("red shirt", taken.get, exclude_id=own) == "red-shirt-2"

    def test_lookup_errors_propagate(self):
        def broken(slug):
            raise RuntimeError("store down")

        with pytest.raises(RuntimeError):
            unique_slug("anything", broken)
