import sys
import logging
from pathlib import Path
from typing import List

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

logger = logging.getLogger("config")

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    OPENROUTER_API_KEY: str = Field(..., min_length=1)

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    DEFAULT_MODEL_OPENROUTER: str = "google/gemini-2.5-flash-preview:thinking"

    # ─── OpenRouter ranking headers ─────────────────────
    # Change the referer for public deployments.
    OPENROUTER_HTTP_REFERER: str = "http://localhost:3000"
    OPENROUTER_APP_TITLE: str = "Your App Name Here"

    UPSTREAM_TIMEOUT_S: float = 30.0

    STATIC_DIR: Path = BASE_DIR / "public"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

@lru_cache
def get_settings():
    return Settings()


def load_settings_or_exit() -> Settings:
    """
    Startup guard: a missing API key is fatal, not a per-request error.
    """
    try:
        return get_settings()
    except ValidationError:
        logger.error("Error: OPENROUTER_API_KEY not found in .env file or environment variables.")
        logger.error("Please set OPENROUTER_API_KEY to your OpenRouter API key.")
        sys.exit(1)
