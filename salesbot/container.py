"""
===============================================================================
TARJETA CRC — salesbot/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, stores, use cases, dispatcher).
  - Centralizar decisiones runtime basadas en Settings (config).
  - Construir el estado en memoria UNA vez por proceso y entregarlo al
    Dispatcher (sin globals ambientales).

Colaboradores:
  - crosscutting.config.Settings
  - infrastructure.repositories.* (implementaciones)
  - application.* (use cases + máquina de login)
  - interfaces.chat.Dispatcher

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Los repositorios son inyectables para tests (fakes).
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from .application.login_flow import LoginStateMachine
from .application.usecases import AuthenticateUserUseCase, ListRecentOrdersUseCase
from .crosscutting.config import Settings
from .domain.repositories import (
    BotConfigRepository,
    LoginDialogueStore,
    OrderRepository,
    SessionStore,
    UserRepository,
)
from .domain.services import ChatTransport
from .infrastructure.repositories import (
    InMemoryLoginDialogueStore,
    InMemorySessionStore,
    PostgresBotConfigRepository,
    PostgresOrderRepository,
    PostgresUserRepository,
)
from .interfaces.chat.dispatcher import Dispatcher


def get_bot_config_repository() -> BotConfigRepository:
    """Repositorio de configuración del bot (Postgres, pool global)."""
    return PostgresBotConfigRepository()


def build_dispatcher(
    settings: Settings,
    transport: ChatTransport,
    *,
    user_repository: Optional[UserRepository] = None,
    order_repository: Optional[OrderRepository] = None,
    sessions: Optional[SessionStore] = None,
    dialogues: Optional[LoginDialogueStore] = None,
) -> Dispatcher:
    """
    Arma el Dispatcher con su estado en memoria y casos de uso.

    Regla:
      - Por defecto: repos Postgres (pool global) + stores in-memory nuevos.
    """
    users = user_repository or PostgresUserRepository()
    orders = order_repository or PostgresOrderRepository()

    return Dispatcher(
        transport=transport,
        sessions=sessions if sessions is not None else InMemorySessionStore(),
        login_flow=LoginStateMachine(
            dialogues if dialogues is not None else InMemoryLoginDialogueStore()
        ),
        authenticate_user=AuthenticateUserUseCase(users),
        list_recent_orders=ListRecentOrdersUseCase(
            orders, limit=settings.orders_limit
        ),
        currency_suffix=settings.currency_suffix,
        order_date_format=settings.order_date_format,
        unify_auth_failure_messages=settings.unify_auth_failure_messages,
    )
