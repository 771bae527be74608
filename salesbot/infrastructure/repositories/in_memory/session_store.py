"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/session_store.py
============================================================
Class: InMemorySessionStore

Responsibilities:
  - Mantener sesiones autenticadas en memoria (conversation_id -> user_id).
  - Garantizar a lo sumo una sesión por conversación (set reemplaza).
  - delete idempotente (logout sin sesión no falla).

Collaborators:
  - domain.repositories.SessionStore (contrato)
  - threading.Lock (thread-safety)

Constraints / Notes:
  - Sin persistencia: un reinicio del proceso descarta todas las sesiones.
  - Repo puro: no aplica reglas de negocio; sólo almacena/retorna datos.
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional

from ....identity.users import UserId


class InMemorySessionStore:
    """
    Store in-memory de sesiones.

    Modelo mental:
    - _sessions actúa como tabla: conversation_id (str) -> user_id
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._sessions: Dict[str, UserId] = {}

    def get(self, conversation_id: str) -> Optional[UserId]:
        with self._lock:
            return self._sessions.get(conversation_id)

    def set(self, conversation_id: str, user_id: UserId) -> None:
        with self._lock:
            self._sessions[conversation_id] = user_id

    def delete(self, conversation_id: str) -> None:
        with self._lock:
            self._sessions.pop(conversation_id, None)

    def __contains__(self, conversation_id: object) -> bool:
        with self._lock:
            return conversation_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
