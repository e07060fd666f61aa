# storefront/core/supabase_client.py
from functools import lru_cache
from supabase import create_client, Client

from storefront.core.config import get_settings


@lru_cache
def supabase_admin() -> Client:
    """
    Create a Supabase client with the service role key.

    Used by SupabaseAssetStore to upload/remove catalog images.

    WARNING:
      - Never expose service role key to frontend.
      - Only backend should call this.

    Raises:
        RuntimeError: if SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is not set.
    """
    settings = get_settings()
    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("Missing SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY in .env")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
