import logging
import sys
import traceback


class LoggerAdapter(logging.LoggerAdapter):
    def __init__(self, logger, extra):
        super().__init__(logger, extra)
        self.logger = logger
        self.extra = extra

    def log(self, level, msg, *args, **kwargs):
        exc_info = kwargs.pop("exc_info", None)
        if exc_info:
            # Inline the full traceback into the message
            if exc_info is True:
                exc_info = sys.exc_info()
            elif isinstance(exc_info, BaseException):
                exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
            if exc_info[0] is not None:
                msg = f"{msg}\n" + "".join(
                    traceback.format_exception(exc_info[0], exc_info[1], exc_info[2])
                ).rstrip()

        self.logger.log(level, msg, *args, **kwargs)


class_color_map = {
    "emitter": {
        "INFO": "light_blue",
        "DEBUG": "cyan",
        "ERROR": "red",
        "WARNING": "yellow",
        "CRITICAL": "red,bg_white",
    },
    "registry": {
        "INFO": "green",
        "DEBUG": "cyan",
        "ERROR": "red",
        "WARNING": "yellow",
        "CRITICAL": "red,bg_white",
    },
    "maintenance": {
        "INFO": "purple",
        "DEBUG": "cyan",
        "ERROR": "red",
        "WARNING": "yellow",
        "CRITICAL": "red,bg_white",
    },
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LOG_FORMAT = "%(asctime)s %(log_color)s%(class_name)s:%(levelname)s%(reset)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
