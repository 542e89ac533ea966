from functools import lru_cache

from app.core.config import settings
from supabase import Client, create_client


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Get the shared Supabase client, created on first use."""
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
