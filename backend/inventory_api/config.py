from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    DATABASE_URL: str = "sqlite:///./inventory.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]

    SECRET_KEY: str = "change-this-secret-before-deploying"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_SECONDS: int = 7 * 24 * 3600

    # drop & recreate all tables on start-up
    RESET_DB: bool = False

    CREATE_DEFAULT_ADMIN: bool = True
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"


settings = Settings()
