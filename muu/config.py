"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Centralised settings — no hardcoded values anywhere else."""

    # Database
    database_url: str = Field(...)

    # Groq chat-completion provider
    groq_api_key: Optional[str] = Field(None)
    groq_base_url: str = Field("https://api.groq.com/openai/v1")
    groq_model: str = Field("llama-3.1-8b-instant")
    groq_timeout_seconds: float = Field(12.0, gt=0)

    # Security
    allowed_origins: str = Field("http://localhost:3000")

    # App
    app_env: str = Field("development")
    log_level: str = Field("INFO")

    # Derived
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = get_settings()
