"""
Database client factory for Supabase.

The backend talks to Supabase with the service-role key, which bypasses
Row Level Security. Ownership scoping is therefore applied explicitly in
every appliance query (see modules.appliances.ownership).
"""

import logging
from typing import Optional

import httpx
from postgrest.exceptions import APIError
from supabase import create_client, Client

from .config import get_settings

logger = logging.getLogger(__name__)

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Returns:
        Supabase client configured with service role key

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def check_database(client: Client) -> bool:
    """
    Run a trivial query to confirm the store is reachable.

    Returns:
        True if the query succeeded, False otherwise
    """
    try:
        client.table("users").select("id").limit(1).execute()
    except APIError as e:
        logger.warning("Database readiness check failed: %s", e.message)
        return False
    except httpx.HTTPError as e:
        logger.warning("Database unreachable: %s", e)
        return False
    return True


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
