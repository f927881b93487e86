"""Supabase client connections."""

from supabase import AsyncClient, create_async_client

from linkstash.config import get_settings
from linkstash.exceptions import StorageNotConfiguredError

# Singleton instance
_async_client: AsyncClient | None = None


async def get_async_supabase_client() -> AsyncClient:
    """Get async Supabase client (cached singleton).

    Raises:
        StorageNotConfiguredError: If the Supabase URL or service key is missing.
    """
    global _async_client
    if _async_client is None:
        settings = get_settings()
        if not settings.storage_configured:
            raise StorageNotConfiguredError("Supabase is not configured")
        _async_client = await create_async_client(
            settings.supabase_url,
            settings.supabase_service_key,
        )
    return _async_client


def reset_clients() -> None:
    """Reset clients for testing."""
    global _async_client
    _async_client = None
