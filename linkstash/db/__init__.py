"""Database connections module."""

from linkstash.db.supabase import get_async_supabase_client, reset_clients

__all__ = ["get_async_supabase_client", "reset_clients"]
