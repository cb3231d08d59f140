# Configuration settings for the Ward Management backend
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Record store location (sqlite file path)
    DATABASE_PATH: str = "ward.db"
    # Seconds a write waits for another writer's lock
    DATABASE_TIMEOUT: float = 5.0

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()

# API Configuration
API_TITLE = "Ward Management System"
API_VERSION = "1.0.0"

# Fixed bed inventory created on first start
BED_ROOMS = ("10", "209", "304")
BEDS_PER_ROOM = 10
