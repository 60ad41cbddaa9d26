from .db_connector import (
    build_engine,
    build_session_factory,
    engine,
    async_session,
    get_db,
    dispose_engine,
)
from .trigram import TRIGRAM_DISTANCE_FN, register_sqlite_functions

__all__ = [
    "build_engine",
    "build_session_factory",
    "engine",
    "async_session",
    "get_db",
    "dispose_engine",
    "TRIGRAM_DISTANCE_FN",
    "register_sqlite_functions",
]
