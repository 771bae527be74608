"""Crosscutting: configuración, logging estructurado y errores tipados."""
