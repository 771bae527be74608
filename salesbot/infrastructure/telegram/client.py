"""
============================================================
TARJETA CRC — infrastructure/telegram/client.py
============================================================
Class: TelegramBotClient

Responsibilities:
  - Implementar ChatTransport sobre el Bot API de Telegram (HTTP + JSON).
  - getMe (probe de identidad), getUpdates (long polling), sendMessage.
  - Parsear updates a InboundMessage (solo `message` con texto es accionable).
  - Traducir fallas de red / HTTP / `ok: false` a TelegramAPIError.

Collaborators:
  - domain.services (ChatTransport, BotIdentity, InboundMessage)
  - crosscutting.exceptions.TransportError
  - crosscutting.logger (token enmascarado en cualquier mensaje)
  - httpx (HTTP client)

Constraints / Notes:
  - Sin reintentos: el caller decide (el poller reintenta en el próximo ciclo).
  - El timeout HTTP de getUpdates = timeout de long-poll + timeout de request.
  - El token viaja en el path del URL: nunca se incluye en mensajes de error.
============================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from ...crosscutting.exceptions import TransportError
from ...crosscutting.logger import logger, mask_bot_token
from ...domain.services import BotIdentity, InboundMessage

_DEFAULT_BASE_URL = "https://api.telegram.org"
_PARSE_MODE_MARKDOWN = "Markdown"
_ALLOWED_UPDATES = ["message"]


class TelegramAPIError(TransportError):
    """Error del Bot API (HTTP, red, o respuesta `ok: false`)."""

    error_code: str = "TELEGRAM_API_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 0,
        description: str = "",
        original_error: Exception | None = None,
    ):
        super().__init__(mask_bot_token(message), original_error=original_error)
        self.status_code = status_code
        self.description = description


def parse_update(raw: Dict[str, Any]) -> Optional[InboundMessage]:
    """
    Convierte un update crudo del Bot API a InboundMessage.

    - Sin update_id => None (no se puede ackear).
    - Sin `message.text` => InboundMessage sin texto (solo avanza el offset).
    """
    update_id = raw.get("update_id")
    if not isinstance(update_id, int):
        return None

    message = raw.get("message") or {}
    chat = message.get("chat") or {}
    chat_id = chat.get("id")
    text = message.get("text")

    if chat_id is None or not isinstance(text, str):
        return InboundMessage(update_id=update_id)

    return InboundMessage(update_id=update_id, conversation_id=str(chat_id), text=text)


class TelegramBotClient:
    """
    Implementación de ChatTransport para el Bot API de Telegram.

    Recibe el token ya validado (leído de `bot_config` por el bootstrap).
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = _DEFAULT_BASE_URL,
        request_timeout_s: float = 10.0,
        http_client: httpx.Client | None = None,
    ):
        if not token:
            raise ValueError("token is required for TelegramBotClient")
        self._base = f"{(base_url or _DEFAULT_BASE_URL).rstrip('/')}/bot{token}"
        self._timeout = request_timeout_s
        self._http = http_client or httpx.Client()

    # ------------------------------------------------------------------
    # Transporte (interno)
    # ------------------------------------------------------------------

    def _call(
        self,
        method: str,
        payload: Dict[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Ejecuta un método del Bot API y devuelve `result`."""
        url = f"{self._base}/{method}"
        try:
            resp = self._http.post(
                url, json=payload or {}, timeout=timeout or self._timeout
            )
        except httpx.HTTPError as exc:
            raise TelegramAPIError(
                f"{method}: network error: {type(exc).__name__}: {exc}",
                original_error=exc,
            ) from exc

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            raise TelegramAPIError(
                f"{method}: HTTP {resp.status_code}: unexpected response body",
                status_code=resp.status_code,
                description="unexpected response body",
            )

        if resp.status_code >= 400 or not body.get("ok", False):
            description = str(body.get("description") or resp.text[:200])
            raise TelegramAPIError(
                f"{method}: HTTP {resp.status_code}: {description}",
                status_code=resp.status_code,
                description=description,
            )

        return body.get("result")

    # ------------------------------------------------------------------
    # API pública (ChatTransport)
    # ------------------------------------------------------------------

    def get_me(self) -> BotIdentity:
        result = self._call("getMe") or {}
        return BotIdentity(
            id=int(result.get("id", 0)),
            username=str(result.get("username", "")),
        )

    def get_updates(
        self, *, offset: Optional[int] = None, timeout: int = 0
    ) -> List[InboundMessage]:
        payload: Dict[str, Any] = {
            "timeout": timeout,
            "allowed_updates": _ALLOWED_UPDATES,
        }
        if offset is not None:
            payload["offset"] = offset

        result = self._call(
            "getUpdates", payload, timeout=float(timeout) + self._timeout
        )
        updates: List[InboundMessage] = []
        for raw in result or []:
            parsed = parse_update(raw)
            if parsed is None:
                logger.warning("Telegram: update sin update_id descartado")
                continue
            updates.append(parsed)
        return updates

    def send_message(
        self, conversation_id: str, text: str, *, markdown: bool = False
    ) -> None:
        payload: Dict[str, Any] = {"chat_id": conversation_id, "text": text}
        if markdown:
            payload["parse_mode"] = _PARSE_MODE_MARKDOWN
        self._call("sendMessage", payload)

    def close(self) -> None:
        self._http.close()
