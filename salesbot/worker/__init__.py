"""Worker: consumidor de updates y tareas periódicas (liveness, heartbeat)."""

from .liveness import LivenessMonitor
from .periodic import PeriodicTask
from .poller import UpdatePoller

__all__ = ["LivenessMonitor", "PeriodicTask", "UpdatePoller"]
