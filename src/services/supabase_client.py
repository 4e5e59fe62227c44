"""Supabase client wrapper with async context manager support."""

import os
from datetime import datetime, timezone
from typing import Optional
from supabase import create_client, Client
from supabase.client import ClientOptions
from src.utils.errors import SupabaseError
from src.utils.listing_config import ListingConfig
import logging

logger = logging.getLogger(__name__)

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton."""
    global _client

    if _client is None:
        url = os.environ.get("SUPABASE_URL")
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

        if not url or not key:
            raise SupabaseError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", extra={"url": url})

    return _client


class SupabaseClient:
    """Async context manager for Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                extra={"error": str(exc_val), "type": exc_type.__name__}
            )
        return False


def is_duplicate_key_error(error: Exception) -> bool:
    """True when Postgres rejected an insert on a unique constraint."""
    message = str(error).lower()
    return "duplicate key" in message or "23505" in message


# Listing pages table operations
async def insert_listing_page(slug: str, code: str, path: str) -> dict:
    """
    Insert a listing page row.

    The slug is the primary key, so a second insert for the same slug fails
    with a duplicate key error instead of overwriting. That error is re-raised
    untouched so callers can tell a collision from any other failure.
    """
    async with SupabaseClient() as client:
        result = client.table(ListingConfig.LISTING_PAGES_TABLE).insert({
            "slug": slug,
            "code": code,
            "path": path,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }).execute()
        if result.data and len(result.data) > 0:
            return result.data[0]
        raise SupabaseError("Failed to insert listing page: no data returned")


async def get_listing_page(slug: str) -> Optional[dict]:
    """Get a listing page row by slug."""
    async with SupabaseClient() as client:
        try:
            result = client.table(ListingConfig.LISTING_PAGES_TABLE).select("*").eq("slug", slug).execute()
            return result.data[0] if result.data and len(result.data) > 0 else None
        except Exception as e:
            raise SupabaseError(f"Failed to get listing page: {e}")
