"""Pydantic configuration models for Topomap.

Uses pydantic-settings for environment variable loading
with validation and type coercion.
"""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from topomap.errors import ConfigValidationError


class TopomapSettings(BaseSettings):
    """Main application settings.

    Settings can be provided via:
    - Environment variables (prefixed with TOPOMAP_)
    - .env file in project root
    - Direct instantiation
    """

    model_config = SettingsConfigDict(
        env_prefix="TOPOMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Layout settings
    default_layout: str = Field(
        default="cidr-tree",
        description="Layout applied when none is requested",
    )

    force_iterations: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Number of force-directed simulation steps",
    )

    grid_columns: int = Field(
        default=0,
        ge=0,
        description="Grid column count (0 = ceil(sqrt(n)))",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper


def get_settings() -> TopomapSettings:
    """Get application settings.

    Raises:
        ConfigValidationError: If the environment holds invalid values
    """
    try:
        return TopomapSettings()
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid settings: {e.error_count()} errors",
            {"errors": e.errors()},
        ) from e
