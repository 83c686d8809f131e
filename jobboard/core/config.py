"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database (DATABASE_URL wins over the postgres_* parts when set)
    database_url: Optional[str] = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "jobboard_user"
    postgres_password: str = "password"
    postgres_db: str = "jobboard_db"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440
    admin_jwt_expire_minutes: int = 480

    # Uploads
    upload_dir: str = "uploads"
    max_resume_size_mb: int = 5
    max_picture_size_mb: int = 2

    # App
    cors_origins: str = "*"
    debug: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def sqlalchemy_url(self) -> str:
        """Construct the database connection URL"""
        if self.database_url:
            # Heroku-style URLs still use the old scheme
            if self.database_url.startswith("postgres://"):
                return self.database_url.replace("postgres://", "postgresql://", 1)
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
