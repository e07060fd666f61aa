# storefront/core/slugs.py
import re
import uuid
from typing import Callable

_QUOTES = re.compile(r"['\"]")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")

SlugLookup = Callable[[str], "uuid.UUID | None"]


def slugify(raw: str, fallback: str = "item") -> str:
    """
    Basic slugification:
      - lowercase
      - drop quote characters
      - non-alphanumeric runs -> '-'
      - strip leading/trailing '-'
    """
    value = raw.strip().lower()
    value = _QUOTES.sub("", value)
    value = _NON_ALNUM.sub("-", value)
    value = value.strip("-")
    return value or fallback


def unique_slug(
    source_text: str,
    lookup: SlugLookup,
    exclude_id: uuid.UUID | None = None,
    fallback: str = "item",
) -> str:
    """
    Derive a slug from `source_text` that no other live record holds.

    `lookup(slug)` returns the id of the record currently holding `slug`
    (case-insensitive) or None. A record identified by `exclude_id` may keep
    colliding with itself, so renames don't bump their own suffix.

    Appends -2, -3, ... until the candidate is free.
    """
    base = slugify(source_text, fallback)
    slug = base
    i = 1
    while True:
        holder = lookup(slug)
        if holder is None or (exclude_id is not None and holder == exclude_id):
            return slug
        i += 1
        slug = f"{base}-{i}"
