"""Database infrastructure helpers (engine, sessions, migrations)."""

from .base import Base
from .session import get_engine, get_session, get_session_factory, init_db, reset_engine

__all__ = [
    "Base",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
    "reset_engine",
]
