"""Application configuration using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Settings for the browser app; env vars use the QSLP_ prefix."""

    model_config = {"env_prefix": "QSLP_"}

    log_level: str = "INFO"

    page_title: str = "Securematch — QSLP Calculator"
    show_error_details: bool = True
    chart_years: int = 30
    show_participation: bool = True  # simulated figures only


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
