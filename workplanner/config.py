"""WorkPlanner Configuration Settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Database
    DATABASE_URL: Optional[str] = None

    # JWT
    JWT_SECRET_KEY: str = Field(default="dev-secret-key-change-me")
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080

    # Application
    APP_NAME: str = "WorkPlanner"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Workflow
    CONCURRENCY_RETRIES: int = 1
    DEFAULT_ENABLED_STATUSES: str = "Todo,InProgress,Done"

    # Seeding
    SEED_DEFAULT_ADMIN: bool = False
    DEFAULT_ADMIN_EMAIL: str = "admin@workplanner.com"
    DEFAULT_ADMIN_PASSWORD: str = "Admin123!"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
