"""
===============================================================================
TARJETA CRC — worker/poller.py (Consumidor único de updates)
===============================================================================

Responsabilidades:
  - Long polling de updates del transporte de chat.
  - Despachar cada mensaje de texto al Dispatcher, de a uno, hasta completarlo
    (sin interleaving => el estado en memoria no necesita locking).
  - Avanzar el offset (ack) por cada update recibido, tenga texto o no.
  - Polling errors: log + pausa + siguiente ciclo (no interrumpe el stream).
  - Aislar fallas por update: una excepción en un handler no mata el loop.

Colaboradores:
  - domain.services.ChatTransport.get_updates
  - interfaces.chat.Dispatcher.dispatch
  - context (update_id / conversation_id para logs)
  - crosscutting.logger
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

from ..context import clear_context, set_update_context
from ..crosscutting.exceptions import TransportError
from ..crosscutting.logger import logger
from ..domain.services import ChatTransport, InboundMessage
from ..interfaces.chat.dispatcher import Dispatcher


class UpdatePoller:
    """Loop de long polling con un único consumidor."""

    def __init__(
        self,
        transport: ChatTransport,
        dispatcher: Dispatcher,
        *,
        poll_timeout_seconds: int = 30,
        poll_interval_seconds: float = 1.0,
    ) -> None:
        self._transport = transport
        self._dispatcher = dispatcher
        self._poll_timeout = poll_timeout_seconds
        self._poll_interval = poll_interval_seconds
        self._offset: Optional[int] = None
        self._stop = threading.Event()

    @property
    def offset(self) -> Optional[int]:
        return self._offset

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        """Deja de recibir: el loop termina al volver del poll en curso."""
        self._stop.set()

    def run(self) -> None:
        logger.info("Polling iniciado", extra={"poll_timeout": self._poll_timeout})
        while not self._stop.is_set():
            self.poll_once()
        logger.info("Polling detenido")

    def poll_once(self) -> int:
        """Un ciclo de polling. Retorna la cantidad de mensajes despachados."""
        try:
            updates = self._transport.get_updates(
                offset=self._offset, timeout=self._poll_timeout
            )
        except TransportError as exc:
            logger.error(f"Polling error: {exc.message}", extra={"error_id": exc.error_id})
            self._stop.wait(self._poll_interval)
            return 0
        except Exception as exc:
            logger.exception("Polling error inesperado", extra={"error": str(exc)})
            self._stop.wait(self._poll_interval)
            return 0

        dispatched = 0
        for update in updates:
            self._offset = max(self._offset or 0, update.update_id + 1)
            if not update.is_text:
                continue
            self._handle(update)
            dispatched += 1
        return dispatched

    def _handle(self, update: InboundMessage) -> None:
        set_update_context(
            update_id=update.update_id, conversation_id=update.conversation_id
        )
        try:
            self._dispatcher.dispatch(update.conversation_id, update.text)
        except Exception as exc:
            logger.exception("Fallo procesando update", extra={"error": str(exc)})
        finally:
            clear_context()
