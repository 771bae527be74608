"""
In-Memory Store Implementations.

Process-local state for chat sessions and login dialogues.
Data is lost on process restart.
"""

from .login_dialogue import InMemoryLoginDialogueStore
from .session_store import InMemorySessionStore

__all__ = [
    "InMemorySessionStore",
    "InMemoryLoginDialogueStore",
]
