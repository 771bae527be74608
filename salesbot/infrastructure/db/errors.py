"""
===============================================================================
CRC CARD — infrastructure/db/errors.py
===============================================================================

Componente:
  Errores del ciclo de vida del pool y de adquisición de conexiones

Responsabilidades:
  - Distinguir "pool sin inicializar" / "doble init" / "sin conexión libre".
  - Heredar de DatabaseError: los repos y use cases los tratan igual que
    cualquier otra falla de DB (respuesta "no disponible", sin reintento).
===============================================================================
"""

from ...crosscutting.exceptions import DatabaseError


class DatabasePoolError(DatabaseError):
    error_code: str = "DATABASE_POOL_ERROR"


class PoolAlreadyInitializedError(DatabasePoolError):
    """init_pool() llamado dos veces en el mismo proceso."""


class PoolNotInitializedError(DatabasePoolError):
    """get_pool() antes de init_pool() (o después de close_pool())."""


class DatabaseConnectionError(DatabasePoolError):
    """No hubo conexión disponible dentro del timeout de adquisición."""

    error_code: str = "DATABASE_CONNECTION_ERROR"
