"""
Database configuration (compatibility layer)

Re-exports the SQLAlchemy engine/session helpers from orm_db_setting.py so models
and repositories import from one place.
"""

from src.platform.database.orm_db_setting import (
    Base,
    Database,
    dispose_engine,
    get_async_session,
    get_engine,
    get_session_maker,
)


__all__ = [
    'Base',
    'Database',
    'dispose_engine',
    'get_async_session',
    'get_engine',
    'get_session_maker',
]
