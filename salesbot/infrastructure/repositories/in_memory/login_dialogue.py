"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/login_dialogue.py
============================================================
Class: InMemoryLoginDialogueStore

Responsibilities:
  - Mantener el paso del diálogo de login por conversación.
  - Garantizar a lo sumo un diálogo activo por conversación.

Collaborators:
  - domain.login_dialogue.LoginDialogueState (variante tipada)
  - application.login_flow.LoginStateMachine (único escritor)
  - threading.Lock (thread-safety)

Constraints / Notes:
  - Sin persistencia: un reinicio descarta diálogos en curso.
  - Las transiciones viven en LoginStateMachine, no acá.
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional

from ....domain.login_dialogue import LoginDialogueState


class InMemoryLoginDialogueStore:
    """Store in-memory: conversation_id -> LoginDialogueState."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._states: Dict[str, LoginDialogueState] = {}

    def get(self, conversation_id: str) -> Optional[LoginDialogueState]:
        with self._lock:
            return self._states.get(conversation_id)

    def set(self, conversation_id: str, state: LoginDialogueState) -> None:
        with self._lock:
            self._states[conversation_id] = state

    def delete(self, conversation_id: str) -> None:
        with self._lock:
            self._states.pop(conversation_id, None)

    def __contains__(self, conversation_id: object) -> bool:
        with self._lock:
            return conversation_id in self._states

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)
