"""User Sync Service - records user profiles and login history in Supabase."""

__version__ = "1.0.0"
