"""
Configuration settings for the QA Testing Backend
"""

import os
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

logger = logging.getLogger(__name__)

# Local frontends allowed outside production
DEVELOPMENT_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

DEFAULT_PRODUCTION_ORIGINS = [
    "https://your-frontend-domain.com",
]

APP_NAME = "QA Testing Backend"
APP_VERSION = "1.0.0"

DEFAULT_MAX_BODY_SIZE = 10 * 1024 * 1024  # 10mb


def _split_origins(value: Optional[str]) -> List[str]:
    if not value:
        return list(DEFAULT_PRODUCTION_ORIGINS)
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Settings:
    database_url: Optional[str] = None
    port: int = 5000
    environment: str = "development"
    production_origins: List[str] = field(default_factory=lambda: list(DEFAULT_PRODUCTION_ORIGINS))
    database_ssl: Optional[str] = "prefer"
    pool_min_size: int = 2
    pool_max_size: int = 10
    command_timeout: float = 60
    acquire_timeout: float = 30
    max_body_size: int = DEFAULT_MAX_BODY_SIZE

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables"""
        ssl_mode = os.getenv("DATABASE_SSL", "prefer")
        return cls(
            database_url=os.getenv("DATABASE_URL"),
            port=int(os.getenv("PORT", 5000)),
            environment=os.getenv("APP_ENV", os.getenv("NODE_ENV", "development")),
            production_origins=_split_origins(os.getenv("ALLOWED_ORIGINS")),
            database_ssl=None if ssl_mode.lower() == "disable" else ssl_mode,
            pool_min_size=int(os.getenv("DB_POOL_MIN_SIZE", 2)),
            pool_max_size=int(os.getenv("DB_POOL_MAX_SIZE", 10)),
            command_timeout=float(os.getenv("DB_COMMAND_TIMEOUT", 60)),
            acquire_timeout=float(os.getenv("DB_ACQUIRE_TIMEOUT", 30)),
            max_body_size=int(os.getenv("MAX_BODY_SIZE", DEFAULT_MAX_BODY_SIZE)),
        )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def allowed_origins(self) -> List[str]:
        """CORS allow-list for the current environment"""
        return self.production_origins if self.is_production else list(DEVELOPMENT_ORIGINS)

    def validate(self):
        """Validate required settings before the server starts"""
        if not self.database_url:
            raise ValueError("DATABASE_URL environment variable is required")
        if self.pool_min_size > self.pool_max_size:
            raise ValueError("DB_POOL_MIN_SIZE cannot exceed DB_POOL_MAX_SIZE")


@lru_cache()
def get_settings() -> Settings:
    """Get the process-wide settings instance"""
    settings = Settings.from_env()
    logger.info(f"Environment: {settings.environment}")
    return settings
