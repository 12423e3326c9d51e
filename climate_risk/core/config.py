"""
Application configuration — loaded from environment / .env file.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # ── App ──
    app_name: str = "climate-risk-engine"
    app_env: str = "development"
    log_level: str = "INFO"

    # ── Model metadata (echoed on every report) ──
    model_version: str = "v2.1.0-beta"
    data_vintage: str = "IMD 2023 · IPCC AR6"

    # ── Scoring ──
    noise_amplitude: float = 12.0  # full width of the uniform noise band (±6)
    default_scenario: str = "ssp2"

    # ── Lending ──
    base_interest_rate: float = 8.5  # % p.a., before climate premium

    # ── Portfolio ──
    portfolio_max_workers: int = 4

    # ── Metrics ──
    metrics_enabled: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ()}


@lru_cache
def get_settings() -> Settings:
    return Settings()
