# salesbot/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del bot (errores internos)
===============================================================================

Objetivo
--------
Que cada falla de infraestructura llegue al handler como un tipo conocido:
el handler decide la respuesta al usuario por tipo, y el log se correlaciona
por error_id. El message nunca incluye secretos (el token se enmascara antes).

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  SalesBotError + subclases

Responsabilidades:
  - Estandarizar errores de infraestructura (DB, transporte, arranque)
  - Generar error_id para rastreo

Colaboradores:
  - infrastructure/repositories/postgres/* (DatabaseError)
  - infrastructure/telegram/client.py (TransportError)
  - main.py (StartupError -> exit code 1)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class SalesBotError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      SalesBotError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message
    ----------------------------------------------------------------------------
    """

    error_code: str = "SALESBOT_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(SalesBotError):
    """Errores de DB (conexión, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class TransportError(SalesBotError):
    """Errores del transporte de chat (red, HTTP, respuesta inválida)."""

    error_code: str = "TRANSPORT_ERROR"


class StartupError(SalesBotError):
    """Fallo fatal de arranque (token ausente, DB inalcanzable)."""

    error_code: str = "STARTUP_ERROR"
