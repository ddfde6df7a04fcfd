from functools import lru_cache

from supabase import Client, create_client

from app.core.config import get_settings


@lru_cache
def _create_client() -> Client:
    settings = get_settings()
    return create_client(settings.supabase_url, settings.supabase_service_key)


def get_supabase() -> Client:
    """FastAPI dependency returning the shared service-role Supabase client."""
    return _create_client()
