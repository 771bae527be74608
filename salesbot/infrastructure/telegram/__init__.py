"""Cliente del Bot API de Telegram (ChatTransport)."""

from .client import TelegramAPIError, TelegramBotClient, parse_update

__all__ = ["TelegramBotClient", "TelegramAPIError", "parse_update"]
