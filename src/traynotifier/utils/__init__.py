"""Utilities: logging, exceptions and constants"""

from .exceptions import (  # noqa: F401
    ErrorSeverity,
    ErrorCategory,
    NotifierError,
    ConfigurationError,
    BindError,
    TraySetupError,
    SoundError,
    wrap_exception,
)
from .unified_logger import (  # noqa: F401
    logger,
    app_logger,
    LogLevel,
    LogCategory,
    loguru_sink,
)

__all__ = [
    "ErrorSeverity",
    "ErrorCategory",
    "NotifierError",
    "ConfigurationError",
    "BindError",
    "TraySetupError",
    "SoundError",
    "wrap_exception",
    "logger",
    "app_logger",
    "LogLevel",
    "LogCategory",
    "loguru_sink",
]
