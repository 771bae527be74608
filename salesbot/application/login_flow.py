"""
===============================================================================
TARJETA CRC — application/login_flow.py
===============================================================================

Clase:
    LoginStateMachine

Responsabilidades:
    - begin(conversation_id): entra a AwaitingUsername (reemplaza cualquier estado).
    - advance(conversation_id, text): consume el texto según el paso actual.
        * AwaitingUsername           -> AwaitingPassword(username), PasswordRequested
        * AwaitingPassword(username) -> CredentialsSubmitted (estado se conserva
                                        hasta que el caller llame clear())
        * sin estado                 -> NoActiveDialogue
    - clear(conversation_id): abandono o fin del diálogo (idempotente).

Colaboradores:
    - domain.login_dialogue (variantes de estado y de resultado)
    - domain.repositories.LoginDialogueStore (almacenamiento por conversación)

Notas:
    - El manejo de variantes es exhaustivo: un estado desconocido es un bug
      y se reporta con TypeError.
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from ..domain.login_dialogue import (
    AwaitingPassword,
    AwaitingUsername,
    CredentialsSubmitted,
    LoginDialogueState,
    LoginStep,
    NoActiveDialogue,
    PasswordRequested,
)
from ..domain.repositories import LoginDialogueStore


class LoginStateMachine:
    """Máquina de estados del diálogo de login (username -> password)."""

    def __init__(self, store: LoginDialogueStore) -> None:
        self._store = store

    def state(self, conversation_id: str) -> Optional[LoginDialogueState]:
        return self._store.get(conversation_id)

    def begin(self, conversation_id: str) -> None:
        self._store.set(conversation_id, AwaitingUsername())

    def advance(self, conversation_id: str, text: str) -> LoginStep:
        current = self._store.get(conversation_id)

        if current is None:
            return NoActiveDialogue()

        if isinstance(current, AwaitingUsername):
            self._store.set(conversation_id, AwaitingPassword(username=text))
            return PasswordRequested(username=text)

        if isinstance(current, AwaitingPassword):
            return CredentialsSubmitted(username=current.username, password=text)

        raise TypeError(f"Unknown login dialogue state: {current!r}")

    def clear(self, conversation_id: str) -> None:
        self._store.delete(conversation_id)
