from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_name: str = "Event Catalog"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Store
    store_backend: str = "sql"  # Options: "sql", "memory"
    database_url: str = "sqlite+aiosqlite:///./catalog.db"
    database_echo: bool = False
    database_create_schema: bool = True  # create_all on startup; disable when migrations own the schema

    # CORS - comma-separated list of allowed origins
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Requests
    request_timeout: float = 30.0  # seconds

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # OpenTelemetry Distributed Tracing
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"  # Options: "console", "otlp", "none"
    telemetry_otlp_endpoint: str | None = None  # e.g., "http://localhost:4317"
    telemetry_sample_rate: float = 1.0  # Sampling rate (0.0-1.0, 1.0 = 100%)
    telemetry_environment: str = "development"  # deployment environment tag

    @model_validator(mode="after")
    def validate_store_config(self) -> "Settings":
        """Validate store backend and pagination configuration"""
        if self.store_backend not in ("sql", "memory"):
            raise ValueError(
                f"Invalid store_backend '{self.store_backend}'. "
                f"Must be one of: 'sql', 'memory'"
            )
        if self.store_backend == "sql" and not self.database_url:
            raise ValueError("DATABASE_URL is required when store_backend is 'sql'.")

        if self.max_page_size < 1:
            raise ValueError("max_page_size must be at least 1")
        if not 1 <= self.default_page_size <= self.max_page_size:
            raise ValueError("default_page_size must be between 1 and max_page_size")

        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("telemetry_sample_rate must be between 0.0 and 1.0")
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", case_sensitive=False
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
