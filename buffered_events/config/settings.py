"""
Global Emitter Settings

Process-wide defaults for buffered emitters, read from the environment
(and a local .env file), plus validation of per-emitter options.
"""

from typing import Dict, Any, Optional
import os
import json
from dataclasses import dataclass, field

import dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from buffered_events.config.logging import LOG_LEVELS, LOG_FORMAT

dotenv.load_dotenv()

DEFAULT_TTL_SECONDS = 1.0
DEFAULT_MAINTENANCE_CHANCE_PERCENT = 100.0

ENV_PREFIX = "BUFFERED_EVENTS_"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class EmitterOptions(BaseModel):
    """Validated options for a single BufferedEventEmitter"""

    model_config = ConfigDict(extra="forbid")

    ttl_seconds: float = Field(
        default=DEFAULT_TTL_SECONDS,
        gt=0,
        description="Idle seconds after which maintenance evicts a buffer",
    )
    maintenance_chance_percent: float = Field(
        default=DEFAULT_MAINTENANCE_CHANCE_PERCENT,
        ge=0,
        le=100,
        description="Probability that create_buffer runs a maintenance pass",
    )
    debug: bool = Field(default=False, description="Trace every operation")
    log_level: str = Field(default="INFO", description="Logger level")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


@dataclass
class EmitterSettings:
    """Default emitter behaviour"""

    ttl_seconds: float = DEFAULT_TTL_SECONDS
    maintenance_chance_percent: float = DEFAULT_MAINTENANCE_CHANCE_PERCENT
    debug: bool = False


@dataclass
class LoggingSettings:
    """Logging configuration"""

    log_level: str = "INFO"
    log_format: str = LOG_FORMAT


@dataclass
class Settings:
    """Global buffered events settings"""

    emitter: EmitterSettings = field(default_factory=EmitterSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from BUFFERED_EVENTS_* environment variables"""
        settings = cls()
        env = os.environ

        if env.get(f"{ENV_PREFIX}TTL_SECONDS"):
            settings.emitter.ttl_seconds = float(env[f"{ENV_PREFIX}TTL_SECONDS"])
        if env.get(f"{ENV_PREFIX}MAINTENANCE_CHANCE"):
            settings.emitter.maintenance_chance_percent = float(
                env[f"{ENV_PREFIX}MAINTENANCE_CHANCE"]
            )
        if env.get(f"{ENV_PREFIX}DEBUG"):
            settings.emitter.debug = _env_bool(env[f"{ENV_PREFIX}DEBUG"])
        if env.get(f"{ENV_PREFIX}LOG_LEVEL"):
            settings.logging.log_level = env[f"{ENV_PREFIX}LOG_LEVEL"].upper()

        return settings

    def emitter_options(self, **overrides) -> EmitterOptions:
        """Merge these defaults with explicit overrides and validate them"""
        values = {
            "ttl_seconds": self.emitter.ttl_seconds,
            "maintenance_chance_percent": self.emitter.maintenance_chance_percent,
            "debug": self.emitter.debug,
            "log_level": self.logging.log_level,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return EmitterOptions(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary"""
        return {
            "emitter": {
                "ttl_seconds": self.emitter.ttl_seconds,
                "maintenance_chance_percent": self.emitter.maintenance_chance_percent,
                "debug": self.emitter.debug,
            },
            "logging": {
                "log_level": self.logging.log_level,
                "log_format": self.logging.log_format,
            },
        }

    def save_to_file(self, file_path: str) -> None:
        """Save current settings to a JSON file"""
        with open(file_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, file_path: str) -> "Settings":
        """Load settings from a JSON file"""
        with open(file_path, "r") as f:
            data = json.load(f)

        return cls(
            emitter=EmitterSettings(**data.get("emitter", {})),
            logging=LoggingSettings(**data.get("logging", {})),
        )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def initialize_settings(config_file: Optional[str] = None, **overrides) -> Settings:
    """Initialize settings with optional config file and overrides

    Overrides are matched against the emitter and logging sub-settings by
    field name, e.g. ``initialize_settings(ttl_seconds=30)``.
    """
    global _settings

    if config_file and os.path.exists(config_file):
        _settings = Settings.load_from_file(config_file)
    else:
        _settings = Settings.from_env()

    for key, value in overrides.items():
        if hasattr(_settings.emitter, key):
            setattr(_settings.emitter, key, value)
        elif hasattr(_settings.logging, key):
            setattr(_settings.logging, key, value)

    return _settings


def reset_settings() -> None:
    """Reset settings to default (useful for testing)"""
    global _settings
    _settings = None
