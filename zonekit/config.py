"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import TimeRange

CONFIG_FILE_NAME = "zonekit.yaml"


class BusinessDefaults(BaseModel):
    """Default business hours used when none are given explicitly."""
    start_hour: int = 9
    end_hour: int = 17
    horizon_days: int = 7

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @field_validator("horizon_days")
    @classmethod
    def validate_horizon(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"horizon_days must be positive, got {v}")
        return v

    @model_validator(mode="after")
    def check_order(self) -> "BusinessDefaults":
        if self.end_hour <= self.start_hour:
            raise ValueError(
                f"end_hour ({self.end_hour}) must be later than start_hour ({self.start_hour})"
            )
        return self

    def as_time_range(self) -> TimeRange:
        """Default hours as a ``TimeRange``."""
        return TimeRange(self.start_hour, self.end_hour)


class ZoneKitSettings(BaseModel):
    """Application settings."""
    data_dir: Optional[Path] = None  # Alternate reference tables
    display_timezone: str = "UTC"
    log_level: str = "WARNING"
    business: BusinessDefaults = Field(default_factory=BusinessDefaults)
    meeting_zones: List[str] = Field(default_factory=list)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "ZoneKitSettings":
        """
        Load settings from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            ZoneKitSettings instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping at the root level.")

        return cls(**data)

    @classmethod
    def load_or_default(cls, config_path: Optional[Path] = None) -> "ZoneKitSettings":
        """
        Load settings from an explicit path, or from the default path if it exists.

        An explicit path must exist; a missing default file yields default settings.
        """
        if config_path is not None:
            return cls.load_from_yaml(config_path)

        default_path = get_default_config_path()
        if default_path.exists():
            return cls.load_from_yaml(default_path)
        return cls()


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for zonekit.yaml in current directory
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if not config_path.exists():
        config_path = Path.home() / CONFIG_FILE_NAME

    return config_path
