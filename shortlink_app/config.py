from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import FrozenSet


DEFAULT_RESERVED_WORDS = (
    "admin,api,docs,redoc,openapi.json,health,login,logout,signup,register,"
    "user,users,url,urls,suborg,category,categories,static,assets,"
    "favicon.ico,robots.txt"
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True

    # Application
    app_name: str = "Shortlink"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Database
    database_url: str = "sqlite:///./shortlink.db"

    # Short endpoint allocation
    base_url: str = "http://127.0.0.1:8000"
    short_url_length: int = 7  # Random endpoints are [A-Za-z0-9]{7}
    max_retries: int = 10
    alias_max_length: int = 32
    reserved_words: str = DEFAULT_RESERVED_WORDS  # Comma separated

    # Cache settings
    cache_backend: str = "redis"  # Options: "redis", "memory", "null"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: int = 3600  # Cache TTL in seconds (1 hour)

    # Destination liveness check
    liveness_backend: str = "dns"  # Options: "dns", "http", "null"
    liveness_timeout: float = 3.0  # Seconds

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


def parse_reserved_words(raw: str) -> FrozenSet[str]:
    """Split the comma separated setting into a lower-cased frozenset."""
    return frozenset(
        word.strip().lower() for word in raw.split(",") if word.strip()
    )


# Create settings instance
settings = Settings()

# Loaded once at process start, never recomputed per request
RESERVED_WORDS: FrozenSet[str] = parse_reserved_words(settings.reserved_words)
