"""Datastore client lifecycle."""
from fastapi import Request
from user_sync.config import Settings
from user_sync.datastore import BaseDatastore
from user_sync.datastore.supabase import SupabaseClient


async def create_datastore(settings: Settings) -> SupabaseClient:
    """Create the process-wide Supabase client."""
    return await SupabaseClient.create(
        url=settings.supabase_url,
        service_key=settings.supabase_service_key,
        timeout=settings.supabase_timeout,
    )


def get_datastore(request: Request) -> BaseDatastore:
    """Dependency returning the client created at startup."""
    return request.app.state.datastore
