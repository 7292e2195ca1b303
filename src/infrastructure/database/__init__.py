from .async_db import AsyncSessionFactory, create_async_db_and_tables, engine, get_async_db
from .database import check_database_health

__all__ = [
    "AsyncSessionFactory",
    "check_database_health",
    "create_async_db_and_tables",
    "engine",
    "get_async_db",
]
