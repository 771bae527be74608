"""
===============================================================================
TARJETA CRC — worker/periodic.py (Tareas periódicas en background)
===============================================================================

Clase:
  PeriodicTask

Responsabilidades:
  - Ejecutar una función cada `interval` segundos en un thread daemon.
  - Sobrevivir a fallas de la función (log y siguiente tick).
  - Detenerse rápido: stop() despierta el wait sin esperar el intervalo.

Colaboradores:
  - worker.liveness.LivenessMonitor (probe de identidad)
  - main.SalesBotApp (heartbeat "running")
  - crosscutting.logger

Notas:
  - El primer tick ocurre después de un intervalo completo (no al arrancar).
  - Las tareas periódicas no tocan el estado de conversación.
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from ..crosscutting.logger import logger


class PeriodicTask:
    """Timer recurrente simple basado en threading.Event."""

    def __init__(self, name: str, interval_seconds: float, fn: Callable[[], None]):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self.name = name
        self._interval = interval_seconds
        self._fn = fn
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name=f"periodic-{self.name}", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def run_once(self) -> None:
        """Ejecuta un tick protegido (usado por el loop y por tests)."""
        try:
            self._fn()
        except Exception as exc:
            logger.exception(
                "Tarea periódica falló", extra={"task": self.name, "error": str(exc)}
            )

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            self.run_once()
