import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    APP_NAME: str = "schemes-api"
    APP_VERSION: str = "1.0.0"

    # --- CONFIG ---
    ENV = os.getenv("APP_ENV", "production")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./schemes.db")
    DB_ECHO = _flag("DB_ECHO", "false")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- STARTUP ---
    SEED_DEMO_DATA = _flag("SEED_DEMO_DATA", "true")


@lru_cache
def get_settings():
    return Settings()
