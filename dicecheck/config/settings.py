"""
DiceCheck - Application Settings

Loads configuration from environment variables using Pydantic Settings.
On Streamlit Cloud, bridges st.secrets into env vars so Pydantic can read them.
"""

import logging
import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dicecheck.engine.simulation import DEFAULT_BATCH_SIZE, DEFAULT_SIMULATIONS

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_SECRET_KEYS = (
    "DICECHECK_DEFAULT_SIMULATIONS",
    "DICECHECK_BATCH_SIZE",
    "DICECHECK_MAX_WORKERS",
    "DICECHECK_SEED",
    "DICECHECK_MAX_SIMULATIONS",
    "DICECHECK_DEBUG",
    "DICECHECK_LOG_LEVEL",
)


def _load_streamlit_secrets() -> None:
    """Bridge Streamlit Cloud secrets into environment variables."""
    try:
        import streamlit as st

        for key in _SECRET_KEYS:
            if key not in os.environ and key in st.secrets:
                os.environ[key] = str(st.secrets[key])
    except Exception:
        # No secrets.toml outside Streamlit Cloud
        logger.debug("Streamlit secrets unavailable; using environment only")


class Settings(BaseSettings):
    """Application settings loaded from ``DICECHECK_*`` environment variables."""

    # Simulation
    default_simulations: int = Field(default=DEFAULT_SIMULATIONS, gt=0)
    batch_size: int = Field(default=DEFAULT_BATCH_SIZE, gt=0)
    max_workers: int | None = Field(default=None, gt=0)
    seed: int | None = None
    max_simulations: int = Field(default=50_000_000, gt=0)

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DICECHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    _load_streamlit_secrets()
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Install a basic root handler at ``level`` (defaults to settings)."""
    if level is None:
        settings = get_settings()
        level = "DEBUG" if settings.debug else settings.log_level
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
