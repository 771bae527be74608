"""Entrada de chat: router de comandos y diálogo de login."""

from .dispatcher import Dispatcher, parse_command

__all__ = ["Dispatcher", "parse_command"]
