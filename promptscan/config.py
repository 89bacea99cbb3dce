"""Configuration management using Pydantic BaseSettings.

This module provides centralized configuration management with validation,
type safety, and sensible defaults for the duplicate scanner.  Values are
read from ``DEDUP_*`` environment variables (and ``.env``); logging settings
use the unprefixed ``LOG_LEVEL`` / ``LOG_FORMAT``.
"""
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from promptscan.utils.logger import DEFAULT_FORMAT


class LoggingConfig(BaseSettings):
    """Logging configuration."""
    level: str = Field("INFO", description="Logging level")
    format: str = Field(DEFAULT_FORMAT, description="Log format")

    model_config = {
        "env_prefix": "LOG_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Invalid log level: {v}. Valid options: {valid_levels}')
        return v.upper()


class Config(BaseSettings):
    """Main configuration class for duplicate scanning."""

    # Resource budgets
    max_items: int = Field(1000, ge=1, le=100000, description="Max entries scanned without allow_large_datasets")
    allow_large_datasets: bool = Field(False, description="Bypass the max_items guard (timeout still applies)")
    timeout_ms: int = Field(10000, ge=1, le=3600000, description="Wall-clock budget per scan in milliseconds")
    yield_interval_ms: int = Field(50, ge=0, le=10000, description="Cooperative yield interval in milliseconds")

    # Similarity thresholds
    title_threshold: float = Field(0.8, ge=0.0, le=1.0, description="Title similarity required for a duplicate")
    content_threshold: float = Field(0.9, ge=0.0, le=1.0, description="Content similarity required for a duplicate")

    # Length bucketing
    bucket_size: int = Field(100, ge=1, le=100000, description="Content length bucket width in characters")

    # Logging
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "DEDUP_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }

    @property
    def log_level(self) -> str:
        return self.logging.level

    @property
    def log_format(self) -> str:
        return self.logging.format

    def validate_configuration(self) -> List[str]:
        """Validate the complete configuration and return any advisory issues."""
        issues = []

        if self.content_threshold < 0.5:
            issues.append("DEDUP_CONTENT_THRESHOLD is very low, may group unrelated prompts")
        if self.title_threshold < 0.5:
            issues.append("DEDUP_TITLE_THRESHOLD is very low, may group unrelated prompts")

        if self.allow_large_datasets and self.timeout_ms > 60000:
            issues.append("DEDUP_ALLOW_LARGE_DATASETS with a timeout above 60s can block the caller for a long time")

        if self.bucket_size < 50:
            issues.append("DEDUP_BUCKET_SIZE below 50 prunes pairs the length check would still accept")

        return issues

    def log_configuration(self) -> None:
        """Log the current configuration."""
        from promptscan.utils.logger import log_info

        log_info("Configuration loaded",
                 max_items=self.max_items,
                 allow_large_datasets=self.allow_large_datasets,
                 timeout_ms=self.timeout_ms,
                 yield_interval_ms=self.yield_interval_ms,
                 title_threshold=self.title_threshold,
                 content_threshold=self.content_threshold,
                 bucket_size=self.bucket_size,
                 log_level=self.log_level)


# Global configuration instance (lazy loading)
_config = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Reload configuration from environment variables."""
    global _config
    _config = Config()
    return _config
