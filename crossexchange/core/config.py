"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        database_url: SQLAlchemy URL of the quote/portfolio/trade store.
        database_echo: Log every SQL statement at INFO (debugging only).
        rate_limit_enabled: Toggle slowapi rate limiting.
        rate_limit_trades: Rate limit applied to trade execution endpoints.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "CrossExchange"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # SQLite works out of the box; use postgresql+psycopg2://... with the
    # `postgres` extra installed for a shared database.
    database_url: str = "sqlite:///./crossexchange.db"
    database_echo: bool = False

    rate_limit_enabled: bool = True
    rate_limit_trades: str = "60/minute"


settings = Settings()
