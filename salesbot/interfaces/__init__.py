"""Interfaces: adaptadores de entrada (chat)."""
