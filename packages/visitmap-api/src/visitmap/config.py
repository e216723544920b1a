"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "*"
    environment: str = "development"

    # Ring buffer size for the visit log; 0 keeps every visit
    visit_log_max_records: int = 10000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def validate_production(self) -> None:
        """Raise if running in production with an unbounded visit log."""
        if self.environment == "production" and self.visit_log_max_records <= 0:
            raise RuntimeError(
                "VISIT_LOG_MAX_RECORDS must be a positive integer in production. "
                "An unbounded visit log grows until the process runs out of memory."
            )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings singleton."""
    return Settings()
