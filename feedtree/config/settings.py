"""
FeedTree Configuration System
=============================

Configuration management with environment variables and Pydantic models.
Environment variables (``FEEDTREE_`` prefix, ``__`` for nesting) override
Field defaults.
"""

from pathlib import Path
from typing import Optional
from enum import Enum

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from ..utils.exceptions import ConfigurationError, ErrorCode


class DatePolicy(str, Enum):
    """What to do with a publish date that matches no known format."""
    FALLBACK = "fallback"    # substitute the current time
    FAIL = "fail"            # raise InvalidDateError
    SENTINEL = "sentinel"    # emit ParserSettings.date_sentinel


class LogLevel(str, Enum):
    """Available log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ParserSettings(BaseModel):
    """Feed-to-tree pipeline configuration."""
    date_policy: DatePolicy = Field(default=DatePolicy.FALLBACK, description="Handling of unrecognized publish dates")
    date_sentinel: str = Field(default="", description="Value emitted for unrecognized dates under the sentinel policy")
    max_workers: int = Field(default=1, ge=1, le=32, description="Threads used to parse item bodies (1 = sequential)")


class FetchSettings(BaseModel):
    """Outbound feed request configuration."""
    base_url: str = Field(default="https://medium.com/feed/", description="Prefix joined with a username to build the feed URL")
    request_timeout: int = Field(default=30, ge=1, le=300, description="Request timeout in seconds")
    max_retries: int = Field(default=3, ge=0, le=10, description="Retries for transient HTTP failures")
    backoff_factor: float = Field(default=1.0, ge=0.0, le=30.0, description="Exponential backoff factor between retries")
    user_agent: str = Field(default="FeedTree/1.0", description="User-Agent header sent with feed requests")

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v):
        """Ensure the base URL is absolute and ends with a slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        if not v.endswith("/"):
            v += "/"
        return v


class LoggingSettings(BaseModel):
    """Logging configuration."""
    level: LogLevel = Field(default=LogLevel.INFO, description="Global log level")
    file_path: Optional[str] = Field(default=None, description="Log file path")
    max_file_size_mb: int = Field(default=10, ge=1, le=100, description="Max log file size in MB")
    backup_count: int = Field(default=5, ge=1, le=20, description="Number of log backup files")
    structured_logging: bool = Field(default=False, description="Use structured JSON logging")
    console_logging: bool = Field(default=True, description="Enable console logging")


class FeedTreeSettings(BaseSettings):
    """Main application settings."""

    parser: ParserSettings = Field(default_factory=ParserSettings)
    fetch: FetchSettings = Field(default_factory=FetchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    app_name: str = Field(default="FeedTree", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_nested_delimiter": "__",
        "env_prefix": "FEEDTREE_",
        "extra": "ignore",
    }

    def validate_configuration(self) -> None:
        """Validate cross-field constraints."""
        errors = []

        if self.logging.file_path:
            try:
                Path(self.logging.file_path).parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                errors.append(f"Invalid log file path: {e}")

        if self.parser.date_policy == DatePolicy.SENTINEL and self.parser.date_sentinel.strip() != self.parser.date_sentinel:
            errors.append("date_sentinel must not carry surrounding whitespace")

        if errors:
            raise ConfigurationError(
                f"Configuration validation failed: {'; '.join(errors)}",
                error_code=ErrorCode.CONFIG_INVALID
            )

    def get_effective_log_level(self) -> str:
        """Get effective log level considering debug mode."""
        if self.debug:
            return "DEBUG"
        return self.logging.level.value


def load_settings() -> FeedTreeSettings:
    """Load settings from environment variables, ``.env`` and defaults.

    Returns:
        Loaded and validated settings

    Raises:
        ConfigurationError: If configuration is invalid
    """
    from dotenv import load_dotenv
    load_dotenv()

    try:
        settings = FeedTreeSettings()
        settings.validate_configuration()
        return settings

    except Exception as e:
        if isinstance(e, ConfigurationError):
            raise
        raise ConfigurationError(
            f"Failed to initialize settings: {e}",
            error_code=ErrorCode.CONFIG_INVALID
        ) from e


_settings: Optional[FeedTreeSettings] = None


def get_settings(reload: bool = False) -> FeedTreeSettings:
    """Get global settings instance (singleton pattern).

    Args:
        reload: Force reload of settings

    Returns:
        Global settings instance
    """
    global _settings

    if _settings is None or reload:
        _settings = load_settings()

    return _settings
