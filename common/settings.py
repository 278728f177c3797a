from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CED_", env_file=".env", extra="ignore"
    )

    # Config file
    config_path: Path = Field(default=PROJECT_ROOT / "config" / "config.yaml")

    # Overrides app.ceds_dir from the YAML file when set
    ceds_dir: Path | None = None

    # Logging
    log_level: str = "INFO"


settings = Settings()
