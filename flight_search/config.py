"""Application configuration loaded from environment variables."""

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BUNDLED_AIRPORTS_CSV = Path(__file__).parent / "data" / "airports.csv"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment."""

    def __init__(self):
        self.database_url: str = os.getenv(
            "FLIGHT_SEARCH_DATABASE_URL", "sqlite+aiosqlite:///./flight_search.db"
        )
        self.airports_csv_path: Path = Path(
            os.getenv("FLIGHT_SEARCH_AIRPORTS_CSV", str(BUNDLED_AIRPORTS_CSV))
        )
        self.min_query_length: int = int(os.getenv("FLIGHT_SEARCH_MIN_QUERY_LENGTH", "2"))
        self.echo_sql: bool = _env_bool("FLIGHT_SEARCH_ECHO_SQL")
        self.log_level: str = os.getenv("FLIGHT_SEARCH_LOG_LEVEL", "INFO").upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
