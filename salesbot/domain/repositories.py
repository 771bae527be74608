"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts used by the application layer (ports).
- Keep use cases independent from PostgreSQL and from the in-memory stores.
- Enable straightforward unit testing (fake repositories).

Collaborators
- identity.users: User, UserId
- domain.entities: Order
- domain.login_dialogue: LoginDialogueState
- infrastructure.repositories: postgres_* and in_memory_* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Read repositories raise crosscutting.exceptions.DatabaseError on failure.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
"""

from typing import List, Optional, Protocol

from ..identity.users import User, UserId
from .entities import Order
from .login_dialogue import LoginDialogueState


class UserRepository(Protocol):
    """R: Read access to back office users."""

    def get_user_by_username(self, username: str, *, status: str) -> Optional[User]:
        """
        R: Exact username match filtered by approval status.

        Returns None when no row matches.
        """
        ...


class OrderRepository(Protocol):
    """R: Read access to orders."""

    def list_recent_orders(self, sales_officer_id: UserId, *, limit: int) -> List[Order]:
        """R: Orders owned by the officer, newest first, at most `limit`."""
        ...


class BotConfigRepository(Protocol):
    """R: Read access to the bot configuration row."""

    def get_bot_token(self) -> Optional[str]:
        """R: Stored bot token, or None if the table is empty."""
        ...

    def ping(self) -> None:
        """R: Connectivity self-test; raises DatabaseError when unreachable."""
        ...


class SessionStore(Protocol):
    """R: conversation id -> authenticated user id."""

    def get(self, conversation_id: str) -> Optional[UserId]: ...

    def set(self, conversation_id: str, user_id: UserId) -> None: ...

    def delete(self, conversation_id: str) -> None: ...


class LoginDialogueStore(Protocol):
    """R: conversation id -> login dialogue step."""

    def get(self, conversation_id: str) -> Optional[LoginDialogueState]: ...

    def set(self, conversation_id: str, state: LoginDialogueState) -> None: ...

    def delete(self, conversation_id: str) -> None: ...
