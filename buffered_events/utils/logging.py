from typing import Any
from buffered_events.config.logging import (
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    LoggerAdapter,
    class_color_map,
)
from colorlog import ColoredFormatter
import logging


class Logger:
    def __init__(self, name: str, type: str, level: str = "info"):
        self.name = name
        self.type = type

        def get_color(type, level):
            return class_color_map.get(type, {}).get(level, "white")

        colors = {
            "DEBUG": get_color(self.type, "DEBUG"),
            "INFO": get_color(self.type, "INFO"),
            "WARNING": get_color(self.type, "WARNING"),
            "ERROR": get_color(self.type, "ERROR"),
            "CRITICAL": get_color(self.type, "CRITICAL"),
        }
        self.formatter = ColoredFormatter(
            LOG_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            log_colors=colors,
            reset=True,
        )

        self._logger = logging.getLogger(self.name)

        # Ensure no duplicate handlers are added; an already configured
        # logger keeps the level its owner set
        if not self._logger.handlers:
            self.set_level(level)
            handler = logging.StreamHandler()
            handler.setFormatter(self.formatter)
            self._logger.addHandler(handler)
        else:
            self.level = logging.getLevelName(self._logger.getEffectiveLevel())

        self.logger = LoggerAdapter(self._logger, {"class_name": self.name})

    def get_logger(self):
        return self._logger

    def set_level(self, level: str) -> None:
        self.level = level.upper()
        self._logger.setLevel(getattr(logging, self.level))

    def is_enabled_for(self, level: str) -> bool:
        return self._logger.isEnabledFor(getattr(logging, level.upper()))

    def _extra(self):
        return {"class_name": self.name}

    def log(self, message: str, level: str = "info", exc_info=None):
        self.logger.log(
            getattr(logging, level.upper()),
            message,
            extra=self._extra(),
            exc_info=exc_info,
        )

    def info(self, message: Any):
        self.logger.info(msg=message, extra=self._extra())

    def debug(self, message: str):
        self.logger.debug(msg=message, extra=self._extra())

    def error(self, message: str, exc_info=True):
        self.logger.error(msg=message, extra=self._extra(), exc_info=exc_info)

    def warning(self, message: str, exc_info=None):
        self.logger.warning(msg=message, extra=self._extra(), exc_info=exc_info)

    def critical(self, message: str, exc_info=True):
        self.logger.critical(msg=message, extra=self._extra(), exc_info=exc_info)
