"""
===============================================================================
TARJETA CRC — worker/liveness.py (Liveness Monitor)
===============================================================================

Responsabilidades:
  - En cada tick, llamar al probe "who am I" del transporte de chat.
  - Éxito: loguear línea OK con timestamp ISO.
  - Falla: loguear el error. Sin reintento, sin alerta, sin tocar estado.

Patrones aplicados:
  - Fail-safe diagnostics: nunca lanzar excepciones al caller.

Colaboradores:
  - domain.services.ChatTransport.get_me
  - worker.periodic.PeriodicTask (scheduling)
  - crosscutting.logger
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from ..crosscutting.exceptions import TransportError
from ..crosscutting.logger import logger
from ..domain.services import ChatTransport
from .periodic import PeriodicTask


class LivenessMonitor:
    """Probe periódico de conectividad contra el transporte de chat."""

    def __init__(
        self,
        transport: ChatTransport,
        *,
        interval_seconds: float = 300.0,
        is_running: Callable[[], bool] = lambda: True,
    ) -> None:
        self._transport = transport
        self._is_running = is_running
        self._task = PeriodicTask("liveness", interval_seconds, self.tick)

    def tick(self) -> bool:
        """Un probe. Retorna True si el transporte respondió."""
        if not self._is_running():
            return False

        try:
            self._transport.get_me()
        except TransportError as exc:
            logger.error(
                "Health check failed", extra={"error": exc.message, "error_id": exc.error_id}
            )
            return False

        logger.info(f"{datetime.now(timezone.utc).isoformat()} - Bot health check: OK")
        return True

    def start(self) -> None:
        self._task.start()
        logger.info(
            "Health monitoring started",
            extra={"interval_seconds": self._task.interval},
        )

    def stop(self) -> None:
        self._task.stop()
