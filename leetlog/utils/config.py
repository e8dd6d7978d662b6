# leetlog/utils/config.py
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load .env file before defining settings
load_dotenv()

class Settings(BaseSettings):
    APP_NAME: str = "LeetLog"
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Static problem catalog (LeetCode problems.json dump)
    CATALOG_FILE_PATH: str = os.getenv("CATALOG_FILE_PATH", "data/problems.json")

    # --- Storage Configuration ---
    # "sql" keeps one row per user, "files" keeps one <user_id>.json per user
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "sql").lower()
    database_url: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./leetlog.db")
    USER_DATA_DIR: str = os.getenv("USER_DATA_DIR", "userData")

    # Date keys are calendar days in this zone
    TIMEZONE: str = os.getenv("TIMEZONE", "UTC")

    # Stats windows
    WEEK_DAYS: int = 7
    MONTH_DAYS: int = 30

    # Featured ("competing") problem rotation
    FEATURED_REFRESH_MINUTES: int = 5

settings = Settings()

# --- Validation ---
if settings.STORE_BACKEND not in ("sql", "files"):
    raise ValueError(f"STORE_BACKEND must be 'sql' or 'files', got '{settings.STORE_BACKEND}'")
try:
    ZoneInfo(settings.TIMEZONE)
except (ZoneInfoNotFoundError, ValueError):
    raise ValueError(f"TIMEZONE '{settings.TIMEZONE}' is not a known time zone")
