"""Domain: entidades, estado del diálogo de login y puertos (Protocols)."""
