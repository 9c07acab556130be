"""Datastore connectivity check.

Verifies that the configured Supabase project is reachable and that the
``users`` and ``user_logins`` tables can be read with the service key.
"""
import asyncio
import sys

from user_sync.config import get_settings
from user_sync.database import create_datastore
from user_sync.exceptions import DatastoreError
from user_sync.services.user_service import LOGINS_TABLE, USERS_TABLE


async def check_datastore() -> bool:
    """Ping Supabase and read one row from each table."""
    settings = get_settings()
    if not settings.supabase_url:
        print("SUPABASE_URL is not set.")
        return False
    
    db = await create_datastore(settings)
    try:
        print(f"Connecting to {settings.supabase_url}...")
        connected, message, latency = await db.ping()
        print(f"{message} ({latency:.0f} ms)")
        if not connected:
            return False
        
        ok = True
        for table in (USERS_TABLE, LOGINS_TABLE):
            try:
                await db.select(table, limit=1)
                print(f"Table '{table}' is readable.")
            except DatastoreError as e:
                print(f"Table '{table}' check failed: {e.details}")
                ok = False
        return ok
    finally:
        await db.aclose()


if __name__ == "__main__":
    sys.exit(0 if asyncio.run(check_datastore()) else 1)
