"""Logging configuration."""

import logging

import settings


class DefaultConsoleFormatter(logging.Formatter):
    """The console formatter used by the probe app."""

    fmt = "{asctime} - {name} - {levelname} - {message}"

    def __init__(self) -> None:
        super().__init__(self.fmt, style="{", validate=True)


_stream_handler = logging.StreamHandler()
_stream_handler.setLevel(settings.LOG_LEVEL)
_stream_handler.setFormatter(DefaultConsoleFormatter())

LOGGER = logging.getLogger(settings.LOGGER_NAME)
LOGGER.setLevel(settings.LOG_LEVEL)
# Avoid stacking handlers on module reload
if not LOGGER.handlers:
    LOGGER.addHandler(_stream_handler)
