from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from packages.tiv_core.errors import ConfigurationError


class TIVConfig(BaseSettings):
    """
    Application wide settings.
    Values are loaded from environment variables and the .env file.
    """
    PROJECT_NAME: str = "TIV Timed Interview"
    VERSION: str = "0.1.0"

    # Oracle (LLM)
    GEMINI_API_KEY: Optional[str] = None
    ORACLE_PROVIDER: str = "gemini"  # "gemini" | "mock"
    ORACLE_MODEL: str = "gemini-2.0-flash"
    ORACLE_TIMEOUT_SEC: float = 30.0
    MOCK_LATENCY_MS: int = 0

    # Interview flow
    DEFAULT_ROLE: str = "fullstack developer"
    ALLOW_QUESTION_REGENERATION: bool = False
    ENFORCE_ANSWER_DEADLINES: bool = False
    DEADLINE_GRACE_SEC: float = 5.0

    # Resume upload
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # HTTP
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:5174",
    ]

    # Logging
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @classmethod
    def load(cls) -> "TIVConfig":
        """
        Load settings, wrapping any failure in ConfigurationError.
        """
        try:
            return cls()
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {str(e)}") from e
