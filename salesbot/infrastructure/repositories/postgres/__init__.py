"""
PostgreSQL Repository Implementations.

Raw parameterized SQL over the psycopg connection pool.
"""

from .bot_config import PostgresBotConfigRepository
from .order import PostgresOrderRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresBotConfigRepository",
    "PostgresOrderRepository",
    "PostgresUserRepository",
]
