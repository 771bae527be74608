"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the behavior of the running bot

Collaborators:
  - main.py: reads settings for pool/transport bootstrap
  - container.py: reads settings for use case wiring
  - crosscutting/logger.py: log level and output format

Constraints:
  - No business logic, only configuration
  - The bot token is NOT configuration: it lives in the `bot_config` table

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        db_pool_min_size: Connections kept open by the pool (default: 1)
        db_pool_max_size: Max concurrent connections (default: 10)
        db_pool_timeout_seconds: Max wait to acquire a connection (default: 10)
        db_pool_max_idle_seconds: Idle connection lifetime (default: 30)
        db_statement_timeout_ms: Per-statement guardrail, 0 disables (default: 30000)
        db_sslmode: libpq sslmode for every connection (default: prefer)
        db_slow_query_seconds: Slow query warning threshold (default: 0.25)
        log_level: Root log level (default: INFO)
        log_json: JSON log lines instead of plain text (default: True)
        telegram_api_base_url: Bot API host
        telegram_poll_timeout_seconds: Long-poll timeout (default: 30)
        telegram_poll_interval_seconds: Pause after empty/failed polls (default: 1)
        telegram_request_timeout_seconds: Timeout of non-polling calls (default: 10)
        healthcheck_interval_seconds: Liveness probe period (default: 300)
        heartbeat_interval_seconds: "Running" log period (default: 600)
        orders_limit: Max orders listed by /orders (default: 10)
        currency_suffix: Suffix appended to amounts (default: ETB)
        order_date_format: strftime format for order dates (default zero-pads: 03/05/2024)
        unify_auth_failure_messages: Same reply for unknown user and bad password
    """

    # Required (no defaults)
    database_url: str

    # Database - Connection Pool
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: float = 10.0
    db_pool_max_idle_seconds: float = 30.0
    db_statement_timeout_ms: int = 30000
    db_sslmode: str = "prefer"
    db_slow_query_seconds: float = 0.25

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Telegram transport
    telegram_api_base_url: str = "https://api.telegram.org"
    telegram_poll_timeout_seconds: int = 30
    telegram_poll_interval_seconds: float = 1.0
    telegram_request_timeout_seconds: float = 10.0

    # Periodic tasks
    healthcheck_interval_seconds: float = 300.0
    heartbeat_interval_seconds: float = 600.0

    # Orders listing
    orders_limit: int = 10
    currency_suffix: str = "ETB"
    order_date_format: str = "%m/%d/%Y"

    # Login dialogue
    unify_auth_failure_messages: bool = True

    @field_validator("db_pool_min_size")
    @classmethod
    def pool_min_size_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("db_pool_min_size must be >= 0")
        return v

    @field_validator("db_pool_max_size")
    @classmethod
    def pool_max_size_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("db_pool_max_size must be greater than 0")
        return v

    @field_validator("orders_limit")
    @classmethod
    def orders_limit_in_range(cls, v: int) -> int:
        if v < 1 or v > 100:
            raise ValueError("orders_limit must be between 1 and 100")
        return v

    @field_validator("healthcheck_interval_seconds", "heartbeat_interval_seconds")
    @classmethod
    def interval_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("periodic task intervals must be greater than 0")
        return v

    @field_validator("telegram_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return (v or "").strip().rstrip("/")

    @model_validator(mode="after")
    def validate_pool_bounds(self):
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be <= "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
