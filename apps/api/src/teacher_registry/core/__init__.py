"""
Core module - Configuration, database, Redis, authorization and rate limiting.
"""

from teacher_registry.core.config import get_settings, settings
from teacher_registry.core.database import Base, close_db, get_db, init_db
from teacher_registry.core.redis import close_redis, get_redis, init_redis

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
    "get_redis",
    "init_redis",
    "close_redis",
]
