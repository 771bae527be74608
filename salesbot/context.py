"""
===============================================================================
TARJETA CRC — salesbot/context.py (Contexto por update de chat)
===============================================================================

Responsabilidades:
  - Mantener contexto "update-scoped" usando ContextVars.
  - Permitir correlación de logs sin pasar parámetros por todo el stack.
  - Proveer helpers mínimos: set_update_context(), get_context_dict(), clear_context().

Colaboradores:
  - worker.poller: setea update_id/conversation_id antes de despachar.
  - crosscutting.logger: enriquece logs leyendo get_context_dict().

Restricciones:
  - Solo tipos primitivos (str) para serialización segura.
  - Defaults vacíos ("") para evitar None y simplificar JSON.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Final

# Identificador del update de Telegram (monótono, asignado por el transporte).
update_id_var: ContextVar[str] = ContextVar("update_id", default="")

# Identificador de la conversación (chat id) a la que pertenece el update.
conversation_id_var: ContextVar[str] = ContextVar("conversation_id", default="")

# Nombre del comando en curso ("/orders", "text", ...).
command_var: ContextVar[str] = ContextVar("command", default="")

_CTX_UPDATE_ID: Final[str] = "update_id"
_CTX_CONVERSATION_ID: Final[str] = "conversation_id"
_CTX_COMMAND: Final[str] = "command"


def set_update_context(
    *, update_id: object = "", conversation_id: object = "", command: str = ""
) -> None:
    """
    Setea el contexto del update actual.

    Regla:
      - Valores vacíos significan "no disponible".
    """
    update_id_var.set(str(update_id) if update_id not in (None, "") else "")
    conversation_id_var.set(
        str(conversation_id) if conversation_id not in (None, "") else ""
    )
    command_var.set(command or "")


def get_context_dict() -> dict[str, str]:
    """Devuelve el contexto actual como dict, omitiendo claves vacías."""
    ctx: dict[str, str] = {}

    if val := update_id_var.get():
        ctx[_CTX_UPDATE_ID] = val
    if val := conversation_id_var.get():
        ctx[_CTX_CONVERSATION_ID] = val
    if val := command_var.get():
        ctx[_CTX_COMMAND] = val

    return ctx


def clear_context() -> None:
    """
    Limpia el contexto al final del update.

    Importante:
      - Evita "filtración de contexto" entre updates consecutivos.
    """
    update_id_var.set("")
    conversation_id_var.set("")
    command_var.set("")
