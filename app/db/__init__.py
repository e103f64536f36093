"""Database package — async engine and session factory, Base, request session dependency."""
from app.db.base import Base, async_session_factory, engine, engine_options, get_db, ping

__all__ = ["Base", "async_session_factory", "engine", "engine_options", "get_db", "ping"]
