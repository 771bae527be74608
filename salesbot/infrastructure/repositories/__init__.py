"""
Repository implementations (PostgreSQL + in-memory stores).
"""

from .in_memory import InMemoryLoginDialogueStore, InMemorySessionStore
from .postgres import (
    PostgresBotConfigRepository,
    PostgresOrderRepository,
    PostgresUserRepository,
)

__all__ = [
    "InMemorySessionStore",
    "InMemoryLoginDialogueStore",
    "PostgresBotConfigRepository",
    "PostgresOrderRepository",
    "PostgresUserRepository",
]
