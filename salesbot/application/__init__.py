"""Application layer: casos de uso, diálogo de login y formato de respuestas."""

from .login_flow import LoginStateMachine

__all__ = ["LoginStateMachine"]
