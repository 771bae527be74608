"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones PostgreSQL (singleton)

Responsabilidades:
  - Inicializar, exponer y cerrar el pool de conexiones.
  - Acotar concurrencia (max_size) y tiempo de espera de adquisición (timeout).
  - Configurar conexiones: statement_timeout.
  - Devolver un pool instrumentado (slow queries sin tocar repos).

Colaboradores:
  - psycopg_pool.ConnectionPool
  - infrastructure/db/instrumentation.InstrumentedConnectionPool

Principios:
  - Fail-fast (doble init, uso sin init)
  - Encapsulación (pool global único por proceso)
  - Sin reintentos: agotado el timeout, la operación falla hacia arriba
===============================================================================
"""

from __future__ import annotations

import threading
from functools import partial
from typing import Optional

from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError
from .instrumentation import InstrumentedConnectionPool

_pool: Optional[InstrumentedConnectionPool] = None
_pool_lock = threading.Lock()


def _configure_connection(conn, *, statement_timeout_ms: int) -> None:
    """
    Configura una conexión nueva del pool.

    Aplica statement_timeout (guardrail contra queries colgadas).
    """
    if statement_timeout_ms > 0:
        conn.execute(f"SET statement_timeout = {int(statement_timeout_ms)}")
        conn.commit()


def init_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    *,
    timeout: float = 10.0,
    max_idle: float = 30.0,
    sslmode: str | None = None,
    statement_timeout_ms: int = 0,
    slow_query_seconds: float = 0.25,
):
    """
    Inicializa el pool (una vez por proceso).

    - Las queries que exceden max_size esperan en cola hasta `timeout` segundos.
    - Devuelve un pool instrumentado para mejorar observabilidad.
    """
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("El pool ya fue inicializado.")

        logger.info(
            "Inicializando pool DB",
            extra={"min_size": min_size, "max_size": max_size, "timeout": timeout},
        )

        connect_kwargs: dict[str, object] = {}
        if sslmode:
            connect_kwargs["sslmode"] = sslmode

        real_pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            timeout=timeout,
            max_idle=max_idle,
            kwargs=connect_kwargs,
            configure=partial(
                _configure_connection, statement_timeout_ms=statement_timeout_ms
            ),
            open=True,
        )

        _pool = InstrumentedConnectionPool(
            real_pool, slow_query_seconds=slow_query_seconds
        )

        logger.info(
            "Pool DB inicializado",
            extra={"min_size": min_size, "max_size": max_size},
        )

        return _pool


def get_pool() -> InstrumentedConnectionPool:
    """Retorna el pool instrumentado singleton."""
    if _pool is None:
        raise PoolNotInitializedError(
            "Pool no inicializado. Llamar init_pool() primero."
        )
    return _pool


def close_pool() -> None:
    """Cierra el pool (idempotente)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            logger.info("Cerrando pool DB")
            try:
                _pool.close()
            finally:
                _pool = None
            logger.info("Pool DB cerrado")


def reset_pool() -> None:
    """Reset para tests: descarta el singleton sin propagar errores de cierre."""
    global _pool

    with _pool_lock:
        pool, _pool = _pool, None
    if pool is not None:
        try:
            pool.close()
        except Exception as exc:
            logger.warning("reset_pool: error cerrando pool", extra={"error": str(exc)})
