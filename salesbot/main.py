"""
===============================================================================
TARJETA CRC — salesbot/main.py (Entrypoint del proceso del bot)
===============================================================================

Responsabilidades:
  - Bootstrap: pool DB + self-test, token desde `bot_config`, probe getMe.
  - Componer Dispatcher + poller + tareas periódicas (liveness, heartbeat).
  - Señales (SIGINT/SIGTERM): apagado ordenado -> exit 0.
  - Fallas de arranque (token inválido, DB inalcanzable) -> exit 1.

Patrones aplicados:
  - Process Bootstrap: inicializa recursos del proceso antes de trabajar.
  - Fail-fast: si la DB o el token no están OK, no arrancar "a medias".
  - Shutdown idempotente: dejar de recibir, cerrar transporte, cerrar pool.

Colaboradores:
  - crosscutting.config.get_settings
  - infrastructure.db.pool.init_pool / close_pool
  - infrastructure.telegram.TelegramBotClient
  - container.build_dispatcher / get_bot_config_repository
  - worker.UpdatePoller / LivenessMonitor / PeriodicTask
===============================================================================
"""

from __future__ import annotations

import signal
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import ValidationError

from .container import build_dispatcher, get_bot_config_repository
from .crosscutting.config import Settings, get_settings
from .crosscutting.exceptions import DatabaseError, StartupError, TransportError
from .crosscutting.logger import apply_settings, logger
from .domain.repositories import BotConfigRepository
from .domain.services import ChatTransport
from .infrastructure.db.pool import close_pool, init_pool
from .infrastructure.telegram import TelegramBotClient
from .interfaces.chat.dispatcher import Dispatcher
from .worker import LivenessMonitor, PeriodicTask, UpdatePoller

PLACEHOLDER_BOT_TOKEN = "TELEGRAM_BOT_TOKEN_NOT_SET"

EXIT_OK = 0
EXIT_STARTUP_FAILURE = 1


def validate_bot_token(token: Optional[str]) -> str:
    """Token vacío, ausente o placeholder => StartupError."""
    value = (token or "").strip()
    if not value or value == PLACEHOLDER_BOT_TOKEN:
        raise StartupError("Bot token not configured in database")
    return value


class SalesBotApp:
    """
    Aplicación del bot: dueña de transporte, dispatcher y tareas de fondo.

    Ciclo de vida: initialize() -> run() -> shutdown().
    """

    def __init__(
        self,
        settings: Settings,
        *,
        bot_config_repository: Optional[BotConfigRepository] = None,
        transport_factory: Callable[..., ChatTransport] = TelegramBotClient,
    ) -> None:
        self._settings = settings
        self._bot_config_repository = bot_config_repository
        self._transport_factory = transport_factory

        self.transport: Optional[ChatTransport] = None
        self.dispatcher: Optional[Dispatcher] = None
        self.poller: Optional[UpdatePoller] = None
        self._liveness: Optional[LivenessMonitor] = None
        self._heartbeat: Optional[PeriodicTask] = None
        self._pool = None
        self._pool_initialized = False
        self._shut_down = False
        self.is_running = False

    # ------------------------------------------------------------------
    # Bootstrap
    # ------------------------------------------------------------------

    def _init_database(self) -> BotConfigRepository:
        s = self._settings
        try:
            self._pool = init_pool(
                s.database_url,
                s.db_pool_min_size,
                s.db_pool_max_size,
                timeout=s.db_pool_timeout_seconds,
                max_idle=s.db_pool_max_idle_seconds,
                sslmode=s.db_sslmode,
                statement_timeout_ms=s.db_statement_timeout_ms,
                slow_query_seconds=s.db_slow_query_seconds,
            )
        except Exception as exc:
            raise StartupError("Database pool could not be created", original_error=exc) from exc
        self._pool_initialized = True

        repo = self._bot_config_repository or get_bot_config_repository()
        try:
            repo.ping()
        except DatabaseError as exc:
            raise StartupError("Database unreachable", original_error=exc) from exc

        logger.info("Database connected successfully")
        return repo

    def _load_bot_token(self, repo: BotConfigRepository) -> str:
        try:
            token = repo.get_bot_token()
        except DatabaseError as exc:
            raise StartupError("Bot token could not be read", original_error=exc) from exc
        return validate_bot_token(token)

    def _connect_transport(self, token: str) -> ChatTransport:
        s = self._settings
        transport = self._transport_factory(
            token,
            base_url=s.telegram_api_base_url,
            request_timeout_s=s.telegram_request_timeout_seconds,
        )
        self.transport = transport
        try:
            identity = transport.get_me()
        except TransportError as exc:
            raise StartupError(
                f"Bot token rejected by chat transport: {exc.message}", original_error=exc
            ) from exc

        logger.info(f"Bot authenticated: @{identity.username}")
        return transport

    def initialize(self) -> None:
        """Arranque completo. Cualquier falla => StartupError."""
        s = self._settings
        logger.info("=== DOK TOK Sales Bot starting ===")

        repo = self._init_database()
        token = self._load_bot_token(repo)
        transport = self._connect_transport(token)

        self.dispatcher = build_dispatcher(s, transport)
        self.poller = UpdatePoller(
            transport,
            self.dispatcher,
            poll_timeout_seconds=s.telegram_poll_timeout_seconds,
            poll_interval_seconds=s.telegram_poll_interval_seconds,
        )
        logger.info("Bot message handlers configured")

        self._liveness = LivenessMonitor(
            transport,
            interval_seconds=s.healthcheck_interval_seconds,
            is_running=lambda: self.is_running,
        )
        self._liveness.start()

        self._heartbeat = PeriodicTask(
            "heartbeat", s.heartbeat_interval_seconds, self._log_heartbeat
        )
        self._heartbeat.start()

        self.is_running = True
        logger.info("DOK TOK Sales Bot is now running")

    def _log_heartbeat(self) -> None:
        if not self.is_running:
            return
        sessions = len(self.dispatcher.sessions) if self.dispatcher else 0
        slow_queries = getattr(self._pool, "slow_query_count", 0)
        logger.info(
            f"{datetime.now(timezone.utc).isoformat()} - DOK TOK Bot: Running",
            extra={"active_sessions": sessions, "slow_queries": slow_queries},
        )

    # ------------------------------------------------------------------
    # Loop + apagado
    # ------------------------------------------------------------------

    def run(self) -> None:
        if self.poller is None:
            raise RuntimeError("SalesBotApp not initialized. Call initialize() first.")
        self.poller.run()

    def shutdown(self) -> None:
        """Apagado ordenado (idempotente)."""
        if self._shut_down:
            return
        self._shut_down = True
        logger.info("Shutting down DOK TOK Sales Bot...")

        if self.poller is not None:
            self.poller.stop()
        for task in (self._liveness, self._heartbeat):
            if task is not None:
                task.stop()

        if self.transport is not None:
            try:
                self.transport.close()
            except Exception as exc:
                logger.warning("Error cerrando transporte", extra={"error": str(exc)})

        if self._pool_initialized:
            try:
                close_pool()
            except Exception as exc:
                logger.warning("Error cerrando pool DB", extra={"error": str(exc)})

        self.is_running = False
        logger.info("Bot shutdown complete")


def _raise_keyboard_interrupt(signum, frame) -> None:
    raise KeyboardInterrupt()


def install_signal_handlers() -> None:
    """SIGTERM se trata igual que Ctrl+C (SIGINT)."""
    signal.signal(signal.SIGTERM, _raise_keyboard_interrupt)
    signal.signal(signal.SIGINT, _raise_keyboard_interrupt)


def main() -> int:
    try:
        settings = get_settings()
    except ValidationError as exc:
        logger.error("Invalid configuration", extra={"error": str(exc)})
        return EXIT_STARTUP_FAILURE

    apply_settings(logger, level=settings.log_level, use_json=settings.log_json)

    app = SalesBotApp(settings)
    install_signal_handlers()
    try:
        app.initialize()
    except StartupError as exc:
        logger.error(
            f"Bot initialization failed: {exc.message}",
            extra={"error_id": exc.error_id},
        )
        app.shutdown()
        return EXIT_STARTUP_FAILURE
    except KeyboardInterrupt:
        logger.info("Shutdown signal received during startup")
        app.shutdown()
        return EXIT_OK

    try:
        app.run()
    except KeyboardInterrupt:
        logger.info("Shutdown signal received")
    finally:
        app.shutdown()

    return EXIT_OK


def run() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
