"""API key authentication."""
import secrets
from typing import Optional
from fastapi import Depends
from fastapi.security import APIKeyHeader
from user_sync.config import Settings, get_settings
from user_sync.exceptions import AuthError

api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)


async def verify_api_key(
    api_key: Optional[str] = Depends(api_key_header),
    settings: Settings = Depends(get_settings),
) -> None:
    """Dependency rejecting requests without the shared API key."""
    if not api_key or not settings.api_key:
        raise AuthError()
    if not secrets.compare_digest(api_key.encode("utf-8"), settings.api_key.encode("utf-8")):
        raise AuthError()
