"""
CRC — domain/services.py

Name
- Chat transport port (Protocol)

Responsibilities
- Define what the bot needs from the chat platform:
    * long-poll inbound updates
    * send a text reply (optionally Markdown)
    * "who am I" identity probe
    * teardown

Collaborators
- infrastructure.telegram.TelegramBotClient (implementation)
- interfaces.chat.Dispatcher, worker.poller, worker.liveness (consumers)

Constraints
- Implementations raise crosscutting.exceptions.TransportError on failure.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol


@dataclass(frozen=True, slots=True)
class BotIdentity:
    """R: Result of the identity probe."""

    id: int
    username: str


@dataclass(frozen=True, slots=True)
class InboundMessage:
    """
    R: One inbound update.

    conversation_id/text are None for updates that carry no text message
    (stickers, edits, joins...); they still advance the polling offset.
    """

    update_id: int
    conversation_id: Optional[str] = None
    text: Optional[str] = None

    @property
    def is_text(self) -> bool:
        return bool(self.conversation_id) and self.text is not None


class ChatTransport(Protocol):
    """R: Interface for the chat platform."""

    def get_me(self) -> BotIdentity:
        """R: Identity probe (cheap liveness check)."""
        ...

    def get_updates(
        self, *, offset: Optional[int] = None, timeout: int = 0
    ) -> List[InboundMessage]:
        """R: Long-poll new text messages (ack everything below `offset`)."""
        ...

    def send_message(
        self, conversation_id: str, text: str, *, markdown: bool = False
    ) -> None:
        """R: Send a reply to a conversation."""
        ...

    def close(self) -> None:
        """R: Release transport resources."""
        ...
