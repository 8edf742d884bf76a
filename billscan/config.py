from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Billscan"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8081"]

    # Parsing
    DEFAULT_CURRENCY: str = "VND"
    MAX_TEXT_LENGTH: int = 20_000

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
