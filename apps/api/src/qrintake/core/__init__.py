"""
Core module - Configuration, database, security, and utilities.
"""

from qrintake.core.config import get_settings, settings
from qrintake.core.database import Base, close_db, get_db, init_db
from qrintake.core.redis import close_redis, get_redis_client, init_redis
from qrintake.core.security import create_access_token, decode_token

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    # Redis
    "get_redis_client",
    "init_redis",
    "close_redis",
    # Security
    "create_access_token",
    "decode_token",
]
