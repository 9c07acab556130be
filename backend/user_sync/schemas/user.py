"""User sync schemas."""
from typing import Any, Dict, Optional
from pydantic import BaseModel


class StoreUserRequest(BaseModel):
    """Profile reported by a client on login.
    
    Nothing is type checked; a non-string ``email`` is treated as missing.
    """
    email: Optional[Any] = None
    user_id: Optional[Any] = None
    name: Optional[Any] = None
    picture: Optional[Any] = None
    app_version: Optional[Any] = None
    timezone: Optional[Any] = None
    document_info: Optional[Any] = None
    installation_source: Optional[Any] = None
    install_date: Optional[Any] = None


class StoreUserResponse(BaseModel):
    """Successful upsert."""
    success: bool = True
    message: str
    user: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Error body shared by every failure status."""
    success: bool = False
    error: str
    details: Optional[str] = None


class DatastoreStatus(BaseModel):
    connected: bool
    message: str
    latency_ms: float


class HealthResponse(BaseModel):
    status: str
    app: str
    datastore: DatastoreStatus
