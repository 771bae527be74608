"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/bot_config.py
============================================================
Class: PostgresBotConfigRepository

Responsibilities:
  - Leer el token del bot desde `bot_config` (una sola fila).
  - Self-test de conectividad al arrancar (SELECT NOW()).

Collaborators:
  - PostgresRepository (pool + helpers de ejecución)
  - main.bootstrap (consumidor único)

Constraints / Notes:
  - El token nunca se loguea.
  - Validar el valor (vacío / placeholder) es responsabilidad del bootstrap.
============================================================
"""

from __future__ import annotations

from typing import Optional

from ._base import PostgresRepository


class PostgresBotConfigRepository(PostgresRepository):
    """R: Acceso a la configuración del bot guardada en DB."""

    def ping(self) -> None:
        self._fetchone(
            query="SELECT NOW()",
            params=(),
            context_msg="PostgresBotConfigRepository: connectivity check failed",
            extra={},
        )

    def get_bot_token(self) -> Optional[str]:
        row = self._fetchone(
            query="SELECT bot_token FROM bot_config LIMIT 1",
            params=(),
            context_msg="PostgresBotConfigRepository: get_bot_token failed",
            extra={},
        )
        if not row:
            return None
        return row[0]
