"""Environment-driven settings, read once per process."""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage
    DB_URL: Optional[str] = None  # Overrides the DB_* parts below
    DB_USER: str = "root"
    DB_PASSWORD: str = "root"
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str = "budget_planner"
    DB_CREATE_TABLES: bool = False

    # Service
    SERVICE_NAME: str = "Budget Planner"
    API_VERSION: str = "v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Installments shown by the upcoming view when no limit is given
    UPCOMING_INSTALLMENTS_LIMIT: int = 10

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        validate_default = True

    @property
    def async_db_url(self) -> str:
        """SQLAlchemy URL for the aiomysql driver."""
        return self.DB_URL or (
            f"mysql+aiomysql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
