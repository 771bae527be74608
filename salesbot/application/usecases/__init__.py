"""Use cases del bot (login + listado de órdenes)."""

from .authenticate_user import (
    AuthenticateUserInput,
    AuthenticateUserResult,
    AuthenticateUserUseCase,
    AuthStatus,
)
from .list_recent_orders import (
    DEFAULT_ORDERS_LIMIT,
    ListRecentOrdersInput,
    ListRecentOrdersResult,
    ListRecentOrdersUseCase,
)

__all__ = [
    "AuthStatus",
    "AuthenticateUserInput",
    "AuthenticateUserResult",
    "AuthenticateUserUseCase",
    "DEFAULT_ORDERS_LIMIT",
    "ListRecentOrdersInput",
    "ListRecentOrdersResult",
    "ListRecentOrdersUseCase",
]
