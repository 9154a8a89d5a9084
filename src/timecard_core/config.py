"""Configuration for timecard parsing.

Pydantic Settings-based configuration with environment variable support and
defaults matching the behavior of the upload workflow.

Usage:
    from timecard_core.config import get_settings

    settings = get_settings()
    print(settings.extraction.timeout)
    print(settings.parser.flexible_max_shifts)
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractionConfig(BaseSettings):
    """PDF text extraction settings.

    Environment Variables:
        TIMECARD_EXTRACTION_TIMEOUT: Wall-clock limit for extraction in seconds
        TIMECARD_EXTRACTION_MIN_TEXT_CHARS: Below this many characters the
            pdfplumber fallback is tried
        TIMECARD_EXTRACTION_USE_PDFPLUMBER_FALLBACK: Enable the fallback
    """

    model_config = SettingsConfigDict(
        env_prefix="TIMECARD_EXTRACTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds allowed for turning PDF bytes into text",
    )
    min_text_chars: int = Field(
        default=100,
        ge=0,
        description="Minimum non-whitespace characters before falling back to pdfplumber",
    )
    use_pdfplumber_fallback: bool = Field(
        default=True,
        description="Retry extraction with pdfplumber when PyPDF2 yields too little text",
    )


class ParserConfig(BaseSettings):
    """Line-matching cascade settings.

    Environment Variables:
        TIMECARD_PARSER_FLEXIBLE_MAX_SHIFTS: Cap on shifts accepted by the
            flexible strategy
    """

    model_config = SettingsConfigDict(
        env_prefix="TIMECARD_PARSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    flexible_max_shifts: int = Field(
        default=20,
        gt=0,
        description="Maximum shifts accepted from the flexible (loosest) strategy",
    )


class PayConfig(BaseSettings):
    """Pay computation settings.

    Environment Variables:
        TIMECARD_PAY_DEFAULT_HOURLY_RATE: Rate used when the caller gives none
    """

    model_config = SettingsConfigDict(
        env_prefix="TIMECARD_PAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_hourly_rate: float = Field(
        default=15.0,
        ge=0,
        description="Hourly rate applied when none is supplied",
    )


class TimecardSettings(BaseSettings):
    """Root configuration combining all subsections.

    Environment Variables:
        TIMECARD_ENV: Environment name (development, staging, production, test)
        TIMECARD_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        settings = TimecardSettings(
            extraction=ExtractionConfig(timeout=10.0),
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="TIMECARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    pay: PayConfig = Field(default_factory=PayConfig)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache(maxsize=1)
def get_settings() -> TimecardSettings:
    """Return process-wide settings loaded from the environment."""
    return TimecardSettings()
