"""
Configuration for the supplier ordering service.

settings holds environment configuration (Supabase credentials and the
ledger retry policy); get_supabase_client returns the shared client.
"""

from config.settings import settings, get_settings, Settings
from config.database import (
    db,
    get_supabase_client,
    check_connection,
    reset_connection,
    ConnectionError
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "db",
    "get_supabase_client",
    "check_connection",
    "reset_connection",
    "ConnectionError",
]
