"""Sales order Telegram bot: login dialogue + read-only order listing."""

__version__ = "1.0.0"
