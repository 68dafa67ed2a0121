# core/supabase_client.py

from functools import lru_cache
from typing import Optional

from supabase import create_client, Client
from core.config import settings
from core.logging_config import logger


# ============================================================
# Supabase Client Factory (ALWAYS service role)
# ============================================================

@lru_cache(maxsize=1)
def _build_client(supabase_url: str, supabase_key: str) -> Client:
    # One client per process; failed builds raise and are not cached
    return create_client(supabase_url, supabase_key)


def get_supabase_client() -> Optional[Client]:
    """
    Returns the shared Supabase client built with the SERVICE ROLE KEY.
    Needed for:
        - auth.admin.create_user / delete_user
        - read/write on every collection table
    Returns None when credentials are missing or the client fails to build.
    """
    supabase_url = settings.SUPABASE_URL
    supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY

    if not supabase_url or not supabase_key:
        logger.error("Missing Supabase credentials")
        logger.error(f"   URL: {supabase_url}")
        logger.error(f"   SERVICE ROLE KEY: {'SET' if supabase_key else 'MISSING'}")
        return None

    try:
        return _build_client(supabase_url, supabase_key)
    except Exception as e:
        logger.error(f"Supabase Init Error: {e}", exc_info=True)
        return None


def reset_supabase_client() -> None:
    """Drop the cached client (credential rotation, tests)."""
    _build_client.cache_clear()
