from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./constructtrack.db"
    APP_NAME: str = "ConstructTrack"
    LOG_LEVEL: str = "INFO"

    # Load the demo project when the snapshot table is empty
    SEED_ON_EMPTY: bool = True
    # Stored quantities are trusted on load; this only logs disagreements
    VALIDATE_QUANTITIES_ON_LOAD: bool = True

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"


settings = Settings()
