"""Dashboard settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Concentration dashboard configuration."""

    model_config = {"env_prefix": "CONCVIZ_", "env_file": ".env", "env_file_encoding": "utf-8"}

    log_level: str = "info"

    # Window shown at start-up
    default_window: Literal["day", "week", "month", "recent"] = "recent"

    # Start with two example products so the chart isn't empty
    seed_demo_data: bool = True

    window_title: str = "Concentration Dashboard"


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
