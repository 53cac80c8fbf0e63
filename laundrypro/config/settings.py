"""Application settings using Pydantic."""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    This uses Pydantic to:
    1. Load values from .env file
    2. Validate data types
    3. Provide defaults
    """

    # Client identity
    PROJECT_NAME: str = "LaundryPro"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"

    # Remote API
    API_BASE_URL: str = "https://laundrypro-api.onrender.com"
    API_V1_STR: str = "/v1"
    REQUEST_TIMEOUT: float = 15.0  # seconds, applies to every request

    # Phone numbers
    DEFAULT_COUNTRY_CODE: str = "+84"

    # Lists
    DEFAULT_PAGE_LIMIT: int = 10

    # Auth flow rules
    OTP_LENGTH: int = 6
    PASSWORD_MIN_LENGTH: int = 6
    CHANGE_PASSWORD_MIN_LENGTH: int = 8

    # Phone OTP identity provider (Firebase)
    FIREBASE_API_KEY: Optional[str] = None
    FIREBASE_AUTH_URL: str = "https://identitytoolkit.googleapis.com/v1"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "simple"  # simple, detailed or json
    LOG_DIR: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def api_url(self) -> str:
        """Base URL with the versioned prefix, without a trailing slash."""
        return f"{self.API_BASE_URL.rstrip('/')}/{self.API_V1_STR.strip('/')}"


@lru_cache()
def get_settings() -> Settings:
    """
    Create cached settings instance.
    """
    return Settings()
