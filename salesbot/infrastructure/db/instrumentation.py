"""
===============================================================================
CRC CARD — infrastructure/db/instrumentation.py
===============================================================================

Clases:
  - QueryTimer (wrapper de conexión)
  - InstrumentedConnectionPool (wrapper del pool psycopg)

Responsabilidades:
  - Cronometrar cada execute() y avisar cuando supera el umbral.
  - Contar queries lentas (el heartbeat las reporta).
  - Convertir fallas al pedir conexión (PoolTimeout incluido) en
    DatabaseConnectionError.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - crosscutting.logger
===============================================================================
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Any, Iterator

from ...crosscutting.logger import logger
from .errors import DatabaseConnectionError


def _first_keyword(sql: Any) -> str:
    # R: solo el verbo (SELECT, SET...) para no volcar SQL ni parámetros al log.
    text = str(sql).strip()
    return text.split(maxsplit=1)[0].upper() if text else "?"


class QueryTimer:
    """Envuelve una conexión psycopg; solo execute() cambia de comportamiento."""

    def __init__(self, conn, *, threshold_s: float, on_slow) -> None:
        self._wrapped = conn
        self._threshold_s = threshold_s
        self._on_slow = on_slow

    def execute(self, query, params=None, **kwargs):
        started = time.monotonic()
        try:
            if params is None:
                return self._wrapped.execute(query, **kwargs)
            return self._wrapped.execute(query, params, **kwargs)
        finally:
            took = time.monotonic() - started
            if took >= self._threshold_s:
                self._on_slow(_first_keyword(query), took)

    def __getattr__(self, name: str):
        return getattr(self._wrapped, name)


class InstrumentedConnectionPool:
    """
    Mismo uso que ConnectionPool (`with pool.connection() as conn`), pero las
    conexiones entregadas miden sus queries.
    """

    def __init__(self, inner_pool, *, slow_query_seconds: float = 0.25) -> None:
        self._inner = inner_pool
        self._threshold_s = slow_query_seconds
        self._slow_lock = threading.Lock()
        self._slow_count = 0

    @property
    def slow_query_count(self) -> int:
        with self._slow_lock:
            return self._slow_count

    def _record_slow(self, keyword: str, seconds: float) -> None:
        with self._slow_lock:
            self._slow_count += 1
        logger.warning(
            "DB query lenta",
            extra={"kind": keyword, "seconds": round(seconds, 4)},
        )

    @contextmanager
    def connection(self, *args, **kwargs) -> Iterator[QueryTimer]:
        ctx = self._inner.connection(*args, **kwargs)
        try:
            conn = ctx.__enter__()
        except Exception as exc:
            raise DatabaseConnectionError(
                f"No se pudo obtener una conexión del pool: {type(exc).__name__}",
                original_error=exc,
            ) from exc

        try:
            yield QueryTimer(conn, threshold_s=self._threshold_s, on_slow=self._record_slow)
        except BaseException as exc:
            if not ctx.__exit__(type(exc), exc, exc.__traceback__):
                raise
        else:
            ctx.__exit__(None, None, None)

    def close(self) -> None:
        self._inner.close()

    def __getattr__(self, name: str):
        return getattr(self._inner, name)
