"""Application settings and logging setup."""

import logging
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    """Settings read from FISHING_JOURNAL_* environment variables or a .env file."""

    model_config = SettingsConfigDict(env_prefix="FISHING_JOURNAL_", env_file=".env", extra="ignore")

    data_dir: Path = DATA_DIR
    page_size: int = 6
    weather_delay: float = 0.35  # seconds of simulated lookup latency
    log_level: str = "WARNING"


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the CLI and web server."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
