from .settings import (
    EmitterOptions,
    EmitterSettings,
    LoggingSettings,
    Settings,
    get_settings,
    initialize_settings,
    reset_settings,
)

__all__ = [
    "EmitterOptions",
    "EmitterSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
    "initialize_settings",
    "reset_settings",
]
