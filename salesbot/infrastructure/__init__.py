"""Infraestructura: pool PostgreSQL, repositorios y cliente de Telegram."""
