"""Application configuration management."""
from typing import List, Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Application
    app_name: str = "User Sync Service"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = ["*"]
    
    # Supabase
    supabase_url: str = ""
    supabase_service_key: str = ""  # service role key, bypasses row level security
    supabase_timeout: Optional[float] = None
    
    # Shared secret expected in the x-api-key header
    api_key: str = ""
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
