"""Application configuration"""
from typing import List, NamedTuple, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite:///./sge.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 10
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 3600  # Recycle connections after 1 hour
    DB_AUTO_CREATE: bool = True  # create_all() on startup; use alembic in production

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: List[str] = ["100/minute", "1000/hour"]
    RATE_LIMIT_STORAGE_URI: str = "memory://"  # Use redis:// for production

    # Monitoring
    METRICS_ENABLED: bool = True
    METRICS_PATH: str = "/metrics"

    # JWT Authentication
    JWT_SECRET: str = "sge-dev-secret-change-me-to-a-long-random-value"
    JWT_ISSUER: str = "SGE.API"
    JWT_AUDIENCE: str = "SGE.Client"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Password policy
    PASSWORD_MIN_LENGTH: int = 6

    # Leave
    ANNUAL_LEAVE_DAYS: int = 25

    # Bootstrap admin account (seeded on startup when both are set)
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string into list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


class TokenConfig(NamedTuple):
    """Immutable token settings handed to the token service."""
    secret: str
    issuer: str
    audience: str
    algorithm: str
    access_token_minutes: int
    refresh_token_days: int

    @classmethod
    def from_settings(cls, source: Settings) -> "TokenConfig":
        return cls(
            secret=source.JWT_SECRET,
            issuer=source.JWT_ISSUER,
            audience=source.JWT_AUDIENCE,
            algorithm=source.JWT_ALGORITHM,
            access_token_minutes=source.ACCESS_TOKEN_EXPIRE_MINUTES,
            refresh_token_days=source.REFRESH_TOKEN_EXPIRE_DAYS,
        )


settings = Settings()
token_config = TokenConfig.from_settings(settings)
