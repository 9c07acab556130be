"""API routes."""
from fastapi import APIRouter
from user_sync.api import users

api_router = APIRouter()

api_router.include_router(users.router, tags=["Users"])
