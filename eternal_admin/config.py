"""Application configuration"""
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings

from eternal_admin.utils.jwt_utils import TokenConfig


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite:///./eternal.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 10
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 3600  # Recycle connections after 1 hour

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ENVIRONMENT: str = "development"  # development | production
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or text

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173"

    # JWT Authentication (no defaults: startup fails if either is absent)
    JWT_SECRET: str
    JWT_REFRESH_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Passwords
    BCRYPT_ROUNDS: int = 10

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: List[str] = ["200/minute"]
    RATE_LIMIT_LOGIN: str = "10/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"  # Use redis:// for production
    TRUST_PROXY_HEADERS: bool = False  # Set True if behind reverse proxy

    # Monitoring
    METRICS_ENABLED: bool = True
    METRICS_PATH: str = "/metrics"

    # Default account created by `python -m eternal_admin.seed`
    SEED_ADMIN_EMAIL: str = "admin@example.com"
    SEED_ADMIN_PASSWORD: str = "admin123"
    SEED_ADMIN_NAME: str = "Administrator"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @field_validator("JWT_SECRET", "JWT_REFRESH_SECRET")
    @classmethod
    def _secret_not_blank(cls, value: str, info) -> str:
        if not value or not value.strip():
            raise ValueError(f"{info.field_name} is required")
        return value

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string into list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def token_config(self) -> TokenConfig:
        """Signing configuration handed to the token codec"""
        return TokenConfig(
            access_secret=self.JWT_SECRET,
            refresh_secret=self.JWT_REFRESH_SECRET,
            algorithm=self.JWT_ALGORITHM,
            access_expire_minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES,
            refresh_expire_days=self.REFRESH_TOKEN_EXPIRE_DAYS,
        )


settings = Settings()
