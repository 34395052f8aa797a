"""
Application configuration.

Loads settings from environment variables and an optional .env file.
Field names map to upper-case variables (ODM_URL, WATSON_PWD, ...).
"""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        host: Interface uvicorn binds to.
        port: Port uvicorn listens on.
        rate_limit_enabled: Turn slowapi rate limiting on or off.
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_heavy: Rate limit for endpoints that call upstream services.
        account_store: Storage engine behind the account repository port.
        database_url: SQLAlchemy URL used when account_store is "sql".

    The ODM and Watson credentials default to the values the sample
    deployment ships with; override them through the environment.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "StockTrader Account"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 9080
    rate_limit_enabled: bool = True
    rate_limit_default: str = "60/minute"
    rate_limit_heavy: str = "10/minute"

    # Account store
    account_store: Literal["sql", "memory"] = "sql"
    database_url: str = "sqlite:///./accounts.db"

    # Loyalty rule service (ODM decision service)
    odm_url: Optional[str] = None
    odm_id: str = "odmAdmin"
    odm_pwd: str = "odmAdmin"

    # Sentiment service (tone analyzer)
    watson_url: Optional[str] = None
    watson_id: str = "apikey"
    watson_pwd: Optional[str] = None

    upstream_timeout_seconds: float = 10.0

    # Loyalty change notifications
    messaging_enabled: bool = False
    loyalty_change_webhook_url: Optional[str] = None
    loyalty_change_queue: str = "LoyaltyLevelChange"

    def is_sqlite(self) -> bool:
        """Return True when the configured store URL points at SQLite."""
        return self.database_url.startswith("sqlite")


settings = Settings()
