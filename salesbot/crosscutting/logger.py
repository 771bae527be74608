# salesbot/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logging del bot (una línea JSON por evento)
===============================================================================

Qué garantiza
-------------
- Cada línea lleva el contexto del update en curso (update_id,
  conversation_id, command) cuando lo hay.
- Ninguna línea lleva passwords, hashes ni el token del bot: las claves
  sensibles se reemplazan y los tokens embebidos en URLs del Bot API
  (`/bot<id>:<secreto>/...`) se enmascaran en mensajes, extras y tracebacks.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + redact() + setup_logger() / apply_settings()

Colaboradores:
  - salesbot/context.py (ContextVars del update)
  - crosscutting/config.py (LOG_LEVEL / LOG_JSON)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

_BOT_TOKEN_RE = re.compile(r"bot\d+:[A-Za-z0-9_-]+")

_SECRET_KEYS = frozenset(
    {
        "password",
        "passwd",
        "password_hash",
        "secret",
        "token",
        "bot_token",
        "authorization",
        "api_key",
        "credential",
        "database_url",
    }
)
_REDACTED = "***REDACTADO***"
_MAX_TEXT = 8_000
_MAX_DEPTH = 4

# R: atributos estándar de LogRecord; el resto son `extra=`.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def mask_bot_token(text: str) -> str:
    """Reemplaza cualquier token de bot embebido en `text`."""
    return _BOT_TOKEN_RE.sub("bot***", text)


def redact(value: Any, *, key: str | None = None, depth: int = 0) -> Any:
    """Versión segura para log de un valor `extra` (recursivo, acotado)."""
    if key is not None and key.lower() in _SECRET_KEYS:
        return _REDACTED
    if depth > _MAX_DEPTH:
        return "…"

    if isinstance(value, str):
        value = mask_bot_token(value)
        return value if len(value) <= _MAX_TEXT else value[:_MAX_TEXT] + "…"
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    if isinstance(value, dict):
        return {str(k): redact(v, key=str(k), depth=depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [redact(v, key=key, depth=depth + 1) for v in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return mask_bot_token(str(value))


class JSONFormatter(logging.Formatter):
    """LogRecord -> línea JSON compacta."""

    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": mask_bot_token(record.getMessage()),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "pid": record.process,
            "thread": record.threadName,
        }
        entry.update(get_context_dict())

        for attr, value in record.__dict__.items():
            if attr not in _RECORD_ATTRS:
                entry[attr] = redact(value, key=attr)

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": mask_bot_token(str(exc)),
                "stacktrace": mask_bot_token(
                    "".join(traceback.format_exception(exc_type, exc, tb))
                ),
            }

        return json.dumps(entry, ensure_ascii=False, default=str, separators=(",", ":"))


def _level(name: str | None) -> int:
    resolved = logging.getLevelName((name or "INFO").upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _formatter(use_json: bool) -> logging.Formatter:
    return JSONFormatter() if use_json else logging.Formatter(_PLAIN_FORMAT)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def setup_logger(name: str = "salesbot") -> logging.Logger:
    """
    Logger raíz del paquete, con un único handler a stdout.

    Lee LOG_LEVEL / LOG_JSON del entorno: al importar todavía no hay Settings
    (pueden fallar por DATABASE_URL faltante y ese error también se loguea).
    """
    log = logging.getLogger(name)
    log.setLevel(_level(os.getenv("LOG_LEVEL")))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_formatter(_env_flag("LOG_JSON", True)))
        log.addHandler(handler)

    return log


def apply_settings(log: logging.Logger, *, level: str, use_json: bool) -> None:
    """Reconfigura nivel y formato una vez cargados los Settings."""
    log.setLevel(_level(level))
    for handler in log.handlers:
        handler.setFormatter(_formatter(use_json))


logger = setup_logger()
