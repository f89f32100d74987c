"""
Environment-based settings for the BOQ service

Usage:
    from config.settings import Settings

    settings = Settings.from_env()
    app.config.update(settings.to_flask_config())
"""

import os
from dataclasses import dataclass
from urllib.parse import quote_plus

from dotenv import load_dotenv

from config.constants import (
    DEFAULT_JWT_EXPIRATION_MINUTES,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)

load_dotenv()


def get_environment():
    """Get current environment from .env"""
    return os.getenv("ENVIRONMENT", "development").lower()


def is_production():
    """Check if running in production environment"""
    return get_environment() == "production"


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def build_database_url():
    """
    Resolve the database URL

    DATABASE_URL wins when set; otherwise the DB_* variables used by the
    docker-compose setup are assembled into a PostgreSQL URL.
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    host = os.getenv("DB_HOST", "localhost")
    port = os.getenv("DB_PORT", "5432")
    user = os.getenv("DB_USER", "postgres")
    password = quote_plus(os.getenv("DB_PASSWORD", ""))
    name = os.getenv("DB_NAME", "general")
    sslmode = os.getenv("DB_SSLMODE", "disable")
    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{name}?sslmode={sslmode}"


@dataclass
class Settings:
    environment: str
    database_url: str
    port: int
    jwt_secret: str
    jwt_expiration_minutes: int
    request_timeout_seconds: float
    pool_size: int
    max_overflow: int
    pool_recycle: int
    auto_create_tables: bool

    @classmethod
    def from_env(cls) -> "Settings":
        environment = get_environment()
        return cls(
            environment=environment,
            database_url=build_database_url(),
            port=int(os.getenv("PORT", DEFAULT_PORT)),
            jwt_secret=os.getenv("JWT_SECRET", "default-secret-key"),
            jwt_expiration_minutes=int(os.getenv("JWT_EXPIRATION", DEFAULT_JWT_EXPIRATION_MINUTES)),
            request_timeout_seconds=float(os.getenv("REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS)),
            pool_size=int(os.getenv("DB_POOL_SIZE", 10)),
            max_overflow=int(os.getenv("DB_MAX_OVERFLOW", 5)),
            pool_recycle=int(os.getenv("DB_POOL_RECYCLE", 3600)),
            auto_create_tables=_env_bool("AUTO_CREATE_TABLES", environment != "production"),
        )

    def to_flask_config(self) -> dict:
        return {
            "ENVIRONMENT": self.environment,
            "SQLALCHEMY_DATABASE_URI": self.database_url,
            "SQLALCHEMY_TRACK_MODIFICATIONS": False,
            "SECRET_KEY": self.jwt_secret,
            "JWT_SECRET": self.jwt_secret,
            "JWT_EXPIRATION_MINUTES": self.jwt_expiration_minutes,
            "REQUEST_TIMEOUT_SECONDS": self.request_timeout_seconds,
            "DB_POOL_SIZE": self.pool_size,
            "DB_MAX_OVERFLOW": self.max_overflow,
            "DB_POOL_RECYCLE": self.pool_recycle,
            "AUTO_CREATE_TABLES": self.auto_create_tables,
            "PORT": self.port,
        }
