"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar un usuario para autenticación (username exacto + status).
  - Mapear filas crudas -> entidad `User`.
  - Exponer fallos consistentes vía `DatabaseError`.

Collaborators:
  - PostgresRepository (pool + helpers de ejecución)
  - identity.users.User
  - Tabla: users (esquema del back office, pre-existente)

Constraints / Notes:
  - Repositorio puro: la política "solo approved" la decide el caso de uso
    y llega como parámetro `status`.
  - Retorna None cuando no existe el recurso (no exception por "not found").
  - SQL parametrizado siempre (nunca interpolar input de usuario).
============================================================
"""

from __future__ import annotations

from typing import Optional

from ....identity.users import User
from ._base import PostgresRepository

# R: Lista explícita de columnas; la tabla guarda el hash en `password`.
_USER_COLUMNS = "id, username, password, status, first_name, last_name, role"


class PostgresUserRepository(PostgresRepository):
    """R: Implementación PostgreSQL del repositorio de usuarios."""

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        (user_id, username, password_hash, status, first_name, last_name, role) = row
        return User(
            id=user_id,
            username=username,
            password_hash=password_hash or "",
            status=status or "",
            first_name=first_name or "",
            last_name=last_name or "",
            role=role or "",
        )

    def get_user_by_username(self, username: str, *, status: str) -> Optional[User]:
        """Obtiene un usuario por username exacto y status."""
        row = self._fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE username = %s AND status = %s
                LIMIT 1
            """,
            params=(username, status),
            context_msg="PostgresUserRepository: get_user_by_username failed",
            extra={"username": username, "status": status},
        )
        return self._row_to_user(row) if row else None
