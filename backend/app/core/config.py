"""Application settings and configuration."""

from typing import Literal

from pydantic import Field, model_validator  # type: ignore
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore

DEFAULT_DATABASE_URL = "sqlite:///./exam_authoring.db"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    ENV: Literal["dev", "staging", "prod", "test"] = Field(default="dev")
    PROJECT_NAME: str = Field(default="Exam Authoring API")

    # API
    API_PREFIX: str = Field(default="/v1")

    # Database (exam storage)
    DATABASE_URL: str = Field(default=DEFAULT_DATABASE_URL)

    # CORS - Accept string or list, will be normalized to list
    CORS_ORIGINS: str | list[str] = Field(default="http://localhost:3000,http://localhost:5173")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # CSV import
    MAX_BODY_BYTES_IMPORT: int = Field(default=5 * 1024 * 1024, gt=0)
    IMPORT_MAX_ROWS: int = Field(default=5000, gt=0)
    IMPORT_ENCODING: str = Field(default="utf-8")
    # Report present-but-unrecognized `type` literals instead of silently using "single"
    IMPORT_STRICT_TYPES: bool = Field(default=False)

    @model_validator(mode="before")
    @classmethod
    def parse_cors_origins(cls, data):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(data, dict) and "CORS_ORIGINS" in data:
            cors_origins = data["CORS_ORIGINS"]
            if isinstance(cors_origins, str):
                data["CORS_ORIGINS"] = [
                    origin.strip() for origin in cors_origins.split(",") if origin.strip()
                ]
        return data

    def __init__(self, **kwargs):
        """Validate settings on initialization."""
        super().__init__(**kwargs)
        # Ensure CORS_ORIGINS is a list after initialization
        if isinstance(self.CORS_ORIGINS, str):
            object.__setattr__(
                self,
                "CORS_ORIGINS",
                [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()],
            )
        # Fail fast in production if critical vars are missing
        if self.ENV == "prod" and self.DATABASE_URL == DEFAULT_DATABASE_URL:
            raise ValueError("DATABASE_URL must be set in production")


# Global settings instance
settings = Settings()
