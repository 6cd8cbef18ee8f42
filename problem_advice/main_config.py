"""Application configuration from environment variables and .env files."""
import os
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_env_file() -> str:
    """Get .env file path from ENV (defaults to local)."""
    return f".env_{os.getenv('ENV', 'local')}"


ENV_FILE = get_env_file()


# =============================================================================
# Config Classes
# =============================================================================

class ProblemConfig(BaseSettings):
    """Problem mapping policy."""
    model_config = SettingsConfigDict(env_file=ENV_FILE, env_prefix="PROBLEM_", extra="ignore")

    causal_chains_enabled: bool = Field(default=False)
    stack_traces_enabled: bool = Field(default=False)


class LoggingConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILE, env_prefix="LOG_", extra="ignore")

    level: str = "INFO"
    format: str = "console"

    @field_validator("format")
    @classmethod
    def _known_format(cls, v: str) -> str:
        if v not in ("console", "json"):
            raise ValueError(f"format must be 'console' or 'json', got {v!r}")
        return v


class FastAPIConfig(BaseSettings):
    """FastAPI application configuration."""
    model_config = SettingsConfigDict(env_file=ENV_FILE, env_prefix="FASTAPI_", extra="ignore")

    title: str = "Problem Advice API"
    description: str = "RFC 7807 problem responses for uncaught exceptions"
    version: str = "0.1.0"
    debug: bool = False


# =============================================================================
# Lazy Loaders (cached)
# =============================================================================

@lru_cache
def get_problem_config() -> ProblemConfig:
    return ProblemConfig()

@lru_cache
def get_logging_config() -> LoggingConfig:
    return LoggingConfig()

@lru_cache
def get_fastapi_config() -> FastAPIConfig:
    return FastAPIConfig()
