"""
===============================================================================
MÓDULO: Textos de respuesta del bot
===============================================================================

Responsabilidades:
  - Centralizar los textos que ve el usuario final (evitar strings mágicos).
  - Construir el saludo post-login (nombre + rol + comandos disponibles).

Colaboradores:
  - interfaces.chat.dispatcher
  - application.order_formatting
===============================================================================
"""

from __future__ import annotations

from typing import Final

from ..domain.entities import AuthenticatedUser

WELCOME_PROMPT: Final[str] = (
    "🏢 Welcome to DOK TOK Sales Order Management\n"
    "\n"
    "Please login to access your orders:\n"
    "📝 Send your username to begin"
)
PASSWORD_PROMPT: Final[str] = "🔐 Now send your password:"
LOGIN_REQUIRED: Final[str] = "❌ Please login first using /start"
LOGGED_OUT: Final[str] = "✅ Logged out successfully"
RESTART_REQUIRED: Final[str] = "❌ Please start with /start command"

INVALID_USER: Final[str] = "❌ Invalid username or user not approved"
INVALID_PASSWORD: Final[str] = "❌ Invalid password"
INVALID_CREDENTIALS: Final[str] = "❌ Invalid username or password"
LOGIN_UNAVAILABLE: Final[str] = "❌ Login failed. Please try /start again"

NO_ORDERS: Final[str] = "📭 No orders found"
ORDERS_UNAVAILABLE: Final[str] = "❌ Error loading orders"
ORDERS_HEADER: Final[str] = "📋 *Your Recent Orders:*"


def login_succeeded(user: AuthenticatedUser) -> str:
    """Saludo post-login con nombre, rol y comandos."""
    return (
        f"✅ Welcome {user.display_name}!\n"
        f"📊 Role: {user.role}\n"
        "\n"
        "Available commands:\n"
        "📋 /orders - View your orders\n"
        "🚪 /logout - Logout"
    )
