import os
import logging
from typing import List, NamedTuple, Optional

from fastapi import Request
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))

logger = logging.getLogger(__name__)

DEV_SESSION_SECRET = "dev-session-secret-change-in-production"


class RateLimitRule(NamedTuple):
    name: str
    max_requests: int
    window_seconds: int


class Settings(BaseSettings):
    APP_NAME: str = "MarrakechDunes"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development"
    LOG_LEVEL: str = "INFO"

    # Database, either a full URL or the postgres parts
    DATABASE_URL: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASS: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_PORT: str = "5432"
    DB_NAME: Optional[str] = None
    DB_CONNECT_RETRIES: int = 3
    DB_RETRY_DELAY_SECONDS: float = 3.0
    ALLOW_MEMORY_FALLBACK: bool = True

    # Sessions
    SESSION_SECRET: Optional[str] = None
    SESSION_COOKIE_NAME: str = "marrakech.session"
    SESSION_MAX_AGE_SECONDS: int = 24 * 60 * 60
    SESSION_ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = 12

    # Seed accounts
    ADMIN_PASSWORD: Optional[str] = None
    SUPERADMIN_PASSWORD: Optional[str] = None

    # Comma separated list of allowed browser origins
    CLIENT_URL: str = "http://localhost:5173"

    # Honour X-Forwarded-For only behind a trusted reverse proxy
    TRUST_PROXY: bool = False
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    AUTH_RATE_LIMIT: int = 5
    AUTH_RATE_WINDOW_SECONDS: int = 15 * 60
    ADMIN_RATE_LIMIT: int = 100
    ADMIN_RATE_WINDOW_SECONDS: int = 60
    GENERAL_RATE_LIMIT: int = 200
    GENERAL_RATE_WINDOW_SECONDS: int = 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "production"

    @property
    def cors_origins(self) -> List[str]:
        return [url.strip() for url in self.CLIENT_URL.split(",") if url.strip()]

    @property
    def database_url(self) -> Optional[str]:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST and self.DB_NAME:
            return (
                f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            )
        return None

    @property
    def session_secret(self) -> str:
        if not self.SESSION_SECRET:
            logger.warning(
                "Using default session secret. Set SESSION_SECRET for production!")
            return DEV_SESSION_SECRET
        return self.SESSION_SECRET

    @property
    def default_seed_password(self) -> str:
        return "Marrakech@2025" if self.is_development else "ChangeMe123!"

    def rate_limit_rule(self, name: str) -> RateLimitRule:
        if name == "auth":
            return RateLimitRule(name, self.AUTH_RATE_LIMIT, self.AUTH_RATE_WINDOW_SECONDS)
        if name == "admin":
            return RateLimitRule(name, self.ADMIN_RATE_LIMIT, self.ADMIN_RATE_WINDOW_SECONDS)
        return RateLimitRule("general", self.GENERAL_RATE_LIMIT, self.GENERAL_RATE_WINDOW_SECONDS)


settings = Settings()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
