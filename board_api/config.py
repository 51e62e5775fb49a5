"""Environment-driven settings via pydantic-settings.

All secrets come from environment variables (or a local ``.env`` file).
``get_settings()`` is cached, so there is a single instance per process.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "CHANGE_ME"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite:///./board.db"
    database_echo: bool = False

    # Tokens
    secret_key: str = DEFAULT_SECRET_KEY
    token_algorithm: str = "HS256"
    token_expire_days: int = 7

    # Passwords
    password_hash_rounds: int = 12

    # API
    cors_origins: list[str] = ["http://localhost:5173"]
    host: str = "0.0.0.0"
    port: int = 8000

    # Mail (notifier only logs when smtp_host is unset)
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    mail_from: str = "noreply@example.com"
    mail_from_name: str = "Board"

    # Observability
    log_level: str = "INFO"
    log_format: str = "text"


@lru_cache
def get_settings() -> Settings:
    return Settings()
