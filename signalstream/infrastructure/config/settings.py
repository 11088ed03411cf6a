"""
Unified Configuration Settings - Single Source of Truth
=======================================================
All engine configuration using Pydantic Settings.
Values come from defaults, environment variables and an optional .env file.
"""

import decimal
from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class LogLevel(str, Enum):
    """Logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


ROUNDING_MODES = (
    decimal.ROUND_CEILING,
    decimal.ROUND_DOWN,
    decimal.ROUND_FLOOR,
    decimal.ROUND_HALF_DOWN,
    decimal.ROUND_HALF_EVEN,
    decimal.ROUND_HALF_UP,
    decimal.ROUND_UP,
    decimal.ROUND_05UP,
)


# === LOGGING CONFIGURATION ===

class LoggingSettings(BaseSettings):
    """Logging configuration"""
    level: LogLevel = Field(default=LogLevel.INFO)
    file_enabled: bool = Field(default=False)
    console_enabled: bool = Field(default=True)
    structured_logging: bool = Field(default=True)
    log_dir: str = Field(default="logs")
    max_file_size_mb: int = Field(default=100)
    backup_count: int = Field(default=5)

    class Config:
        env_prefix = "LOG_"


# === NUMERIC CONFIGURATION ===

class NumericSettings(BaseSettings):
    """Exact-decimal arithmetic configuration used by every indicator update"""
    precision: int = Field(default=28, description="Significant digits kept by decimal operations")
    rounding: str = Field(default=decimal.ROUND_HALF_EVEN, description="decimal module rounding mode")

    @field_validator('precision')
    @classmethod
    def validate_precision(cls, v):
        if v < 1:
            raise ValueError(f"Decimal precision must be positive, got {v}")
        return v

    @field_validator('rounding')
    @classmethod
    def validate_rounding(cls, v):
        normalized = v.strip().upper()
        if normalized not in ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode '{v}'. Expected one of: {', '.join(ROUNDING_MODES)}")
        return normalized

    class Config:
        env_prefix = "DECIMAL_"


class AppSettings(BaseSettings):
    """Main engine settings - Single Source of Truth"""

    app_name: str = Field(default="signalstream")

    numeric: NumericSettings = Field(default_factory=NumericSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    class Config:
        env_file = ".env"
        extra = "ignore"
