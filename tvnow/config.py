import logging
import sys

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Validated on construction so a bad environment is reported before any
    request goes out.
    """

    tv_area: str = "tokyo"
    base_url: str = "https://bangumi.org"
    request_timeout_sec: float = 10.0  # Per request, the upstream is third-party
    strict_parsing: bool = False  # Abort on a malformed slot instead of skipping it
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("tv_area")
    @classmethod
    def normalize_tv_area(cls, value: str) -> str:
        """Area names are matched lowercase."""
        return value.strip().lower()

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Validate the provider URL is HTTP/HTTPS."""
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"base_url must be HTTP/HTTPS: {value}")
        return value.rstrip("/")

    @field_validator("request_timeout_sec")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout_sec must be > 0")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate logging level name."""
        normalized = value.upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return normalized

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.debug("Configuration loaded:")
        logger.debug("  Default area: %s", self.tv_area)
        logger.debug("  Base URL: %s", self.base_url)
        logger.debug("  Request timeout: %ss", self.request_timeout_sec)
        logger.debug("  Strict parsing: %s", self.strict_parsing)


_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get or create the settings singleton.

    Returns:
        The process-wide Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (mainly for testing)."""
    global _settings
    _settings = None


def setup_logging(level: str = "WARNING") -> None:
    """Configure application logging.

    Logs go to stderr; stdout carries the guide itself.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
