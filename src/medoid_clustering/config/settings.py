"""Application settings and configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with flat structure."""

    # Search Configuration
    num_local: int = 5
    max_neighbor: int = 100
    metric: str = "squared_euclidean"
    random_seed: int | None = None
    n_jobs: int = 1
    show_progress: bool = False

    # Storage Configuration
    save_results: bool = True
    results_dir: Path = Path("ai_data") / "results"
    metrics_file: Path = Path("ai_data/metrics.csv")

    # Logging Configuration
    log_level: str = "INFO"
    log_file: Path = Path("ai_data/clustering.log")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
