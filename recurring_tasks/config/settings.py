from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    max_window_years: int = Field(
        default=50,
        ge=1,
        validation_alias="MAX_WINDOW_YEARS",
        description="Widest generation window (in years) accepted by check_window",
    )
    import_batch_size: int = Field(
        default=10,
        ge=1,
        validation_alias="IMPORT_BATCH_SIZE",
        description="Number of spreadsheet rows handled per import batch",
    )
    initial_window_years: int = Field(
        default=2,
        ge=1,
        validation_alias="INITIAL_WINDOW_YEARS",
        description="Years populated when a task definition is created (this year + next year)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("max_window_years")
    @classmethod
    def validate_max_window_years(cls, value: int) -> int:
        """Warn when the window bound allows very expensive daily expansions."""
        if value > 200:
            logger.warning(
                f"MAX_WINDOW_YEARS={value} allows windows of more than 73,000 days. "
                "Daily rules expand one date per day; consider a smaller bound."
            )
        return value


settings = Settings()
