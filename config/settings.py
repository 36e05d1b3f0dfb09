"""
Configuration management using Pydantic Settings.

Environment variables:
- AZURE_OCR_ENDPOINT: URL of the OCR service
- AZURE_OCR_APIKEY: Subscription key for the OCR service
- OPENAI_KEY: API key for the completion service
- OPENAI_BASE_URL: Base URL for the completion service
- DATABASE_URL: SQLAlchemy database URL
- SEED_IDS: Record ids used as in-context examples (JSON list)
"""
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import DEFAULT_SEED_IDS, MIN_SEED_FLOOR, MIN_TEXT_FLOOR


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # OCR Configuration
    ocr_endpoint: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AZURE_OCR_ENDPOINT", "OCR_ENDPOINT")
    )
    ocr_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AZURE_OCR_APIKEY", "OCR_API_KEY")
    )
    ocr_timeout: float = Field(default=30.0, validation_alias="OCR_TIMEOUT")

    # Completion Configuration
    openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_KEY", "OPENAI_API_KEY")
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        validation_alias="OPENAI_BASE_URL"
    )
    inference_model: str = Field(default="davinci-002", validation_alias="INFERENCE_MODEL")
    summary_model: str = Field(
        default="gpt-3.5-turbo-instruct",
        validation_alias="SUMMARY_MODEL"
    )
    completion_timeout: float = Field(default=60.0, validation_alias="COMPLETION_TIMEOUT")

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///pigeon.db",
        validation_alias="DATABASE_URL"
    )

    # Seed Selection
    seed_ids: List[int] = Field(
        default_factory=lambda: list(DEFAULT_SEED_IDS),
        validation_alias="SEED_IDS"
    )
    seed_ordering: Optional[List[int]] = Field(default=None, validation_alias="SEED_ORDERING")

    # Shrink Policy
    min_seed_floor: int = Field(default=MIN_SEED_FLOOR, validation_alias="MIN_SEED_FLOOR")
    min_text_floor: int = Field(default=MIN_TEXT_FLOOR, validation_alias="MIN_TEXT_FLOOR")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", validation_alias="API_HOST")
    api_port: int = Field(default=8000, validation_alias="API_PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    def get_completion_config(self) -> dict:
        """Get completion client configuration as dictionary."""
        return {
            'api_key': self.openai_api_key,
            'base_url': self.openai_base_url,
            'timeout': self.completion_timeout,
        }

    def get_ocr_config(self) -> dict:
        """Get OCR service configuration as dictionary."""
        return {
            'endpoint': self.ocr_endpoint,
            'api_key': self.ocr_api_key,
            'timeout': self.ocr_timeout,
        }


# Global settings instance
settings = Settings()
