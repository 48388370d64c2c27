from pathlib import Path

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    catalog_path: Path = PACKAGE_DIR / "resources" / "golf_courses.json"

    timezone: str = "America/Chicago"
    default_players: int = 4

    request_timeout_seconds: float = 15.0
    user_agent: str = "Mozilla/5.0"

    # ForeUp reports local times without an offset; they are read with this fixed offset.
    foreup_utc_offset_hours: float = 0.0

    # Kansas City metro
    default_min_lat: float = 38.757
    default_max_lat: float = 39.427
    default_min_lon: float = -94.908
    default_max_lon: float = -94.235

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
