"""
Process settings using Pydantic Settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Process-level settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Archive configuration document
    CONFIG_PATH: str = "./config.json"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # HTTP (None means no timeout on source requests)
    HTTP_TIMEOUT: Optional[float] = None

    # Event log pipeline
    EVENT_LOG_CAPACITY: int = 50
    EVENT_LOG_DRAIN_TIMEOUT: float = 1.0
    DRY_RUN_PREVIEW_BYTES: int = 500

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000


settings = Settings()
