"""Pydantic schemas for request/response models."""
from user_sync.schemas.user import (
    StoreUserRequest,
    StoreUserResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "StoreUserRequest",
    "StoreUserResponse",
    "ErrorResponse",
    "HealthResponse",
]
