"""Configuration management using Pydantic Settings.

All application settings are defined in the Settings class and loaded from
environment variables (via .env file or system environment).
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every field has a default, so the app starts without any .env file.
    Invalid values raise validation errors.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==================== Ranking Defaults ====================
    default_list_size: int = 10
    default_max_grade: int = 5

    # ==================== Random Generation ====================
    relevance_probability: float = 0.5
    random_seed: int | None = None

    # ==================== Display ====================
    display_precision: int = 4

    # ==================== Logging ====================
    log_level: str = "INFO"

    @field_validator("default_list_size", "default_max_grade")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Ensure list size and max grade are at least 1."""
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("relevance_probability")
    @classmethod
    def validate_probability(cls, v: float) -> float:
        """Ensure the relevance probability is a probability."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("RELEVANCE_PROBABILITY must be between 0 and 1")
        return v

    @field_validator("display_precision")
    @classmethod
    def validate_display_precision(cls, v: int) -> int:
        if not 0 <= v <= 12:
            raise ValueError("DISPLAY_PRECISION must be between 0 and 12")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level and reject unknown names."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level


def get_settings() -> Settings:
    """Load and return the application settings.

    Returns:
        Settings instance populated from environment variables.

    Raises:
        ValidationError: If settings are invalid.
    """
    return Settings()
