"""geoitaly configuration: dataset location, search limits and logging."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Directory holding gi_regioni.json, gi_province.json, gi_comuni_cap.json
    data_dir: Path = Path("data")

    @field_validator("data_dir", mode="before")
    @classmethod
    def _strip_data_dir(cls, value):
        """Strip whitespace and newlines pasted into env files."""
        return value.strip() if isinstance(value, str) else value

    # Search
    default_suggestion_limit: int = 10
    max_search_limit: int = 100

    # Logging
    log_json: bool = True
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_prefix": "GEOITALY_", "extra": "ignore"}


settings = Settings()
