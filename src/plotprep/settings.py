from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    # ---- Data roots (handy for pipelines/scripts) ----
    project_root: Path = Path(".").resolve()
    data_root: Path = Path("data")
    raw_dir: Path = data_root / "raw"
    processed_dir: Path = data_root / "processed"
    reference_dir: Path = data_root / "reference"

    # ---- app/runtime ----
    env: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ---- reshape defaults ----
    key_name: str = "key"
    value_name: str = "value"
    unite_sep: str = "_"

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_prefix="PLOTPREP_",      # PLOTPREP_ENV, PLOTPREP_LOG_LEVEL, etc.
        env_nested_delimiter='__',
        extra = "ignore"
    )


def get_settings() -> Settings:
    """Singleton accessor to avoid reparsing .env on every import."""
    return Settings()
