import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from rankeval.errors import ConfigurationError

# This file: src/rankeval/config/settings.py
SERVER_ROOT = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = SERVER_ROOT / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH)
else:
    # Fallback to simple load_dotenv which looks in cwd
    load_dotenv()

DEFAULT_MAX_ARRAY_SIZE = 1_000_000


class Settings(BaseModel):
    """Global Settings"""

    # Environment
    ENV: str = Field(default="development", description="Environment: development, production, testing")
    LOG_LEVEL: str = Field(default="INFO", description="Log level")

    # Decoding limits
    MAX_ARRAY_SIZE: int = Field(
        default=DEFAULT_MAX_ARRAY_SIZE,
        ge=0,
        description="Largest unknown_docs count accepted when decoding",
    )

    model_config = {
        "frozen": True,
    }


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be an integer",
            details={"value": raw},
            original_error=e,
        ) from e
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative", details={"value": value})
    return value


def load_settings() -> Settings:
    """Load settings from environment variables."""
    return Settings(
        ENV=os.getenv("ENV", "development"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        MAX_ARRAY_SIZE=_int_from_env("RANKEVAL_MAX_ARRAY_SIZE", DEFAULT_MAX_ARRAY_SIZE),
    )


# Global settings instance
settings = load_settings()
