"""
===============================================================================
TARJETA CRC — interfaces/chat/dispatcher.py
===============================================================================

Clase:
    Dispatcher

Responsabilidades:
    - Rutear cada mensaje entrante a un comando (/start, /orders, /logout) o
      al diálogo de login (texto libre).
    - Ser dueño explícito del estado en memoria (Session Store + diálogo).
    - Aplicar mutaciones de estado solo después de un paso exitoso.
    - Responder por el transporte de chat; un fallo al enviar se loguea y
      no altera el estado.

Colaboradores:
    - domain.services.ChatTransport (send_message)
    - domain.repositories.SessionStore
    - application.login_flow.LoginStateMachine
    - application.usecases.AuthenticateUserUseCase
    - application.usecases.ListRecentOrdersUseCase
    - application.order_formatting / application.replies

Notas:
    - Los comandos aceptan sufijo "@nombre_del_bot" y argumentos extra.
    - Comandos desconocidos se ignoran (nunca alimentan el diálogo).
    - Un diálogo activo tiene precedencia sobre la sesión: /start borra la
      sesión, así que ambos no conviven.
===============================================================================
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from ...application import replies
from ...application.login_flow import LoginStateMachine
from ...application.order_formatting import format_orders_message
from ...application.usecases import (
    AuthenticateUserInput,
    AuthenticateUserUseCase,
    AuthStatus,
    ListRecentOrdersInput,
    ListRecentOrdersUseCase,
)
from ...context import command_var
from ...crosscutting.exceptions import TransportError
from ...domain.login_dialogue import (
    CredentialsSubmitted,
    NoActiveDialogue,
    PasswordRequested,
)
from ...domain.repositories import SessionStore
from ...domain.services import ChatTransport

logger = logging.getLogger(__name__)

COMMAND_PREFIX = "/"
TEXT_COMMAND = "text"


def parse_command(text: str) -> Optional[str]:
    """
    Extrae el nombre del comando ("/orders@bot arg" -> "/orders").

    Retorna None si el texto no es un comando.
    """
    stripped = (text or "").strip()
    if not stripped.startswith(COMMAND_PREFIX):
        return None
    head = stripped.split(None, 1)[0]
    return head.split("@", 1)[0].lower()


class Dispatcher:
    """Router de mensajes de chat + dueño del estado de conversación."""

    def __init__(
        self,
        *,
        transport: ChatTransport,
        sessions: SessionStore,
        login_flow: LoginStateMachine,
        authenticate_user: AuthenticateUserUseCase,
        list_recent_orders: ListRecentOrdersUseCase,
        currency_suffix: str = "ETB",
        order_date_format: str = "%m/%d/%Y",
        unify_auth_failure_messages: bool = True,
    ) -> None:
        self._transport = transport
        self._sessions = sessions
        self._login_flow = login_flow
        self._authenticate_user = authenticate_user
        self._list_recent_orders = list_recent_orders
        self._currency_suffix = currency_suffix
        self._date_format = order_date_format
        self._unify_auth_messages = unify_auth_failure_messages

        self._commands: Dict[str, Callable[[str], None]] = {
            "/start": self.handle_start,
            "/orders": self.handle_orders,
            "/logout": self.handle_logout,
        }

    @property
    def sessions(self) -> SessionStore:
        return self._sessions

    @property
    def login_flow(self) -> LoginStateMachine:
        return self._login_flow

    # ------------------------------------------------------------------
    # Entrada
    # ------------------------------------------------------------------

    def dispatch(self, conversation_id: str, text: str) -> None:
        """Procesa un mensaje de texto completo (sin interleaving)."""
        command = parse_command(text)

        if command is None:
            command_var.set(TEXT_COMMAND)
            self.handle_text(conversation_id, text)
            return

        command_var.set(command)
        handler = self._commands.get(command)
        if handler is None:
            logger.debug("Comando desconocido ignorado: %s", command)
            return
        handler(conversation_id)

    # ------------------------------------------------------------------
    # Comandos
    # ------------------------------------------------------------------

    def handle_start(self, conversation_id: str) -> None:
        self._sessions.delete(conversation_id)
        self._login_flow.begin(conversation_id)
        self._reply(conversation_id, replies.WELCOME_PROMPT)

    def handle_orders(self, conversation_id: str) -> None:
        user_id = self._sessions.get(conversation_id)
        if user_id is None:
            self._reply(conversation_id, replies.LOGIN_REQUIRED)
            return

        result = self._list_recent_orders.execute(ListRecentOrdersInput(user_id=user_id))
        if result.unavailable:
            self._reply(conversation_id, replies.ORDERS_UNAVAILABLE)
            return
        if not result.orders:
            self._reply(conversation_id, replies.NO_ORDERS)
            return

        self._reply(
            conversation_id,
            format_orders_message(
                result.orders,
                currency_suffix=self._currency_suffix,
                date_format=self._date_format,
            ),
            markdown=True,
        )

    def handle_logout(self, conversation_id: str) -> None:
        self._sessions.delete(conversation_id)
        self._login_flow.clear(conversation_id)
        self._reply(conversation_id, replies.LOGGED_OUT)

    # ------------------------------------------------------------------
    # Texto libre (diálogo de login)
    # ------------------------------------------------------------------

    def handle_text(self, conversation_id: str, text: str) -> None:
        step = self._login_flow.advance(conversation_id, text)

        if isinstance(step, NoActiveDialogue):
            self._reply(conversation_id, replies.RESTART_REQUIRED)
        elif isinstance(step, PasswordRequested):
            self._reply(conversation_id, replies.PASSWORD_PROMPT)
        elif isinstance(step, CredentialsSubmitted):
            self._complete_login(conversation_id, step)
        else:
            raise TypeError(f"Unknown login step: {step!r}")

    def _complete_login(self, conversation_id: str, step: CredentialsSubmitted) -> None:
        try:
            result = self._authenticate_user.execute(
                AuthenticateUserInput(username=step.username, password=step.password)
            )
        finally:
            # R: éxito o falla, el diálogo termina acá.
            self._login_flow.clear(conversation_id)

        if result.ok and result.user is not None:
            self._sessions.set(conversation_id, result.user.user_id)
            self._reply(conversation_id, replies.login_succeeded(result.user))
            return

        self._reply(conversation_id, self._auth_failure_message(result.status))

    def _auth_failure_message(self, status: AuthStatus) -> str:
        if status is AuthStatus.UNAVAILABLE:
            return replies.LOGIN_UNAVAILABLE
        if self._unify_auth_messages:
            return replies.INVALID_CREDENTIALS
        if status is AuthStatus.INVALID_PASSWORD:
            return replies.INVALID_PASSWORD
        return replies.INVALID_USER

    # ------------------------------------------------------------------
    # Salida
    # ------------------------------------------------------------------

    def _reply(self, conversation_id: str, text: str, *, markdown: bool = False) -> None:
        try:
            self._transport.send_message(conversation_id, text, markdown=markdown)
        except TransportError as exc:
            logger.error(
                "No se pudo enviar respuesta. error_id=%s error=%s",
                exc.error_id,
                exc.message,
            )
