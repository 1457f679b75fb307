"""Configuration management with persistence."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from wxdecode.context import DecodeContext

DEFAULT_CONFIG_PATH = Path.home() / ".wxdecode" / "config.json"


class DecoderConfig(BaseModel):
    """Configuration for report decoding."""
    reference_date: Optional[date] = Field(default=None, description="Fixed reference date for archived reports (None = today, UTC)")
    default_report_type: str = Field(default="METAR", description="Report type assumed when the text has no leading keyword")

    @field_validator('default_report_type')
    @classmethod
    def validate_default_report_type(cls, v):
        v = v.upper()
        if v not in ["METAR", "TAF"]:
            raise ValueError("default_report_type must be one of: METAR, TAF")
        return v


class LoggingConfig(BaseModel):
    """Configuration for log output."""
    level: str = "INFO"
    log_dir: str = "logs"

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        v = v.upper()
        if v not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError("level must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return v

    def level_number(self) -> int:
        return getattr(logging, self.level)


class WebUIConfig(BaseModel):
    """Configuration for the decode web service."""
    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1024, le=65535)


class AppConfig(BaseModel):
    """Main application configuration."""
    decoder: DecoderConfig = Field(default_factory=DecoderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    web_ui: WebUIConfig = Field(default_factory=WebUIConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppConfig":
        """Load configuration from file."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        if config_path.exists():
            with open(config_path, "r") as f:
                data = json.load(f)
            return cls(**data)
        else:
            # Create default config
            config = cls()
            config.save(config_path)
            return config

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")

    def decode_context(self) -> DecodeContext:
        """Reference date for decoding: the configured one, or today (UTC)."""
        if self.decoder.reference_date is not None:
            return DecodeContext.from_date(self.decoder.reference_date)
        return DecodeContext.today()
