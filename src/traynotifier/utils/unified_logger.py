"""Unified logging system - one interface, console + file routing

Usage:
    from traynotifier.utils import logger

    logger.info("Notifier started", LogCategory.LIFECYCLE)
    app_logger.log_tray_event("Icon reset", {"icon": "sun"})
"""

import os
import sys
import time
import threading
import json
import traceback
from typing import Dict, Any, Optional, Union
from pathlib import Path
from enum import Enum


class LogLevel(Enum):
    """Log levels"""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogCategory(Enum):
    """Log categories (used for filtering and routing)"""
    HTTP = "http"
    TRAY = "tray"
    SOUND = "sound"
    LIFECYCLE = "lifecycle"
    STARTUP = "startup"
    ERROR = "error"


class UnifiedLogger:
    """Unified logging system - singleton"""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, '_initialized'):
            return

        self._initialized = True
        self._min_level = LogLevel.DEBUG if self._is_dev_mode() else LogLevel.INFO
        self._console_output_enabled = False
        self._lock = threading.RLock()
        self._log_file = self._default_log_file()

    @staticmethod
    def _is_dev_mode() -> bool:
        return bool("--dev" in sys.argv or os.getenv("TRAYNOTIFIER_DEV"))

    @staticmethod
    def _default_log_file() -> Optional[Path]:
        override = os.getenv('TRAYNOTIFIER_LOG_DIR')
        if override:
            log_dir = Path(override)
        else:
            log_dir = Path(os.getenv('APPDATA', Path.home() / '.local' / 'share')) / 'TrayNotifier' / 'logs'
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            print(f"[LOG WARNING] Cannot create log directory {log_dir}: {e}", file=sys.stderr)
            return None
        return log_dir / 'app.log'

    def _string_to_log_level(self, level_str: str) -> LogLevel:
        try:
            return LogLevel[level_str.upper()]
        except KeyError:
            return LogLevel.INFO

    def set_log_level(self, level: Union[str, LogLevel]) -> None:
        """Change the minimum log level at runtime

        Args:
            level: level name or LogLevel member
        """
        with self._lock:
            if isinstance(level, str):
                self._min_level = self._string_to_log_level(level)
            else:
                self._min_level = level

    def set_console_output(self, enabled: bool) -> None:
        with self._lock:
            self._console_output_enabled = enabled

    def set_log_file(self, path: Optional[Path]) -> None:
        """Redirect file output; None disables the file sink"""
        with self._lock:
            if path is not None:
                path.parent.mkdir(parents=True, exist_ok=True)
            self._log_file = path

    def get_log_level(self) -> LogLevel:
        return self._min_level

    def get_console_output(self) -> bool:
        return self._console_output_enabled

    def get_log_file(self) -> Optional[Path]:
        return self._log_file

    def is_debug_enabled(self) -> bool:
        return self._min_level == LogLevel.DEBUG

    def _should_log(self, level: LogLevel) -> bool:
        return level.value >= self._min_level.value

    def _format_console_message(self, level: LogLevel, category: LogCategory,
                                message: str, context: Dict[str, Any] = None) -> str:
        timestamp = time.strftime('%H:%M:%S')

        colors = {
            LogLevel.DEBUG: '\033[36m',    # Cyan
            LogLevel.INFO: '\033[32m',     # Green
            LogLevel.WARNING: '\033[33m',  # Yellow
            LogLevel.ERROR: '\033[31m',    # Red
            LogLevel.CRITICAL: '\033[35m'  # Magenta
        }
        reset = '\033[0m'
        color = colors.get(level, '')

        line = f"[{timestamp}] {color}{level.name}{reset} | {category.value} | {message}"
        if context and level.value >= LogLevel.WARNING.value:
            details = " | ".join(
                f"{key}: {value}" for key, value in context.items() if key != "traceback"
            )
            if details:
                line += f"\n  {details}"
        return line

    @staticmethod
    def _safe_json_serialize(obj):
        # Enum members (Qt activation reasons, component states)
        if hasattr(obj, 'value') and hasattr(obj, 'name'):
            return f"{type(obj).__name__}.{obj.name}"
        if hasattr(obj, '__name__'):
            return obj.__name__
        return str(obj)

    def _format_file_message(self, level: LogLevel, category: LogCategory,
                             message: str, context: Dict[str, Any] = None,
                             component: str = None) -> str:
        timestamp = time.strftime('%Y-%m-%d %H:%M:%S')

        parts = [timestamp, level.name.ljust(8), category.value.ljust(10)]
        if component:
            parts.append(f"[{component}]")
        parts.append(message)

        if context:
            context_json = json.dumps(context, ensure_ascii=False,
                                      separators=(',', ':'),
                                      default=self._safe_json_serialize)
            parts.append(f"| {context_json}")

        return " | ".join(parts)

    def _write_log(self, level: LogLevel, category: LogCategory, message: str,
                   context: Dict[str, Any] = None, component: str = None) -> None:
        if not self._should_log(level):
            return

        with self._lock:
            if self._console_output_enabled or level.value >= LogLevel.ERROR.value:
                console_msg = self._format_console_message(level, category, message, context)
                output_stream = sys.stderr if level.value >= LogLevel.WARNING.value else sys.stdout
                print(console_msg, file=output_stream, flush=True)

            if self._log_file is None:
                return
            try:
                file_msg = self._format_file_message(level, category, message, context, component)
                with open(self._log_file, 'a', encoding='utf-8') as f:
                    f.write(file_msg + '\n')
            except OSError as e:
                print(f"[LOG ERROR] Failed to write to log file: {e}", file=sys.stderr)

    # ============ Public API ============

    def debug(self, message: str, category: LogCategory = LogCategory.STARTUP,
              context: Dict[str, Any] = None, component: str = None) -> None:
        self._write_log(LogLevel.DEBUG, category, message, context, component)

    def info(self, message: str, category: LogCategory = LogCategory.STARTUP,
             context: Dict[str, Any] = None, component: str = None) -> None:
        self._write_log(LogLevel.INFO, category, message, context, component)

    def warning(self, message: str, category: LogCategory = LogCategory.ERROR,
                context: Dict[str, Any] = None, component: str = None) -> None:
        self._write_log(LogLevel.WARNING, category, message, context, component)

    def error(self, message: str, exception: Exception = None,
              category: LogCategory = LogCategory.ERROR,
              context: Dict[str, Any] = None, component: str = None) -> None:
        ctx = dict(context or {})
        if exception:
            ctx['exception'] = str(exception)
            ctx['exception_type'] = type(exception).__name__
        self._write_log(LogLevel.ERROR, category, message, ctx, component)

    def critical(self, message: str, exception: Exception = None,
                 category: LogCategory = LogCategory.ERROR,
                 context: Dict[str, Any] = None, component: str = None) -> None:
        ctx = dict(context or {})
        if exception:
            ctx['exception'] = str(exception)
            ctx['exception_type'] = type(exception).__name__
        self._write_log(LogLevel.CRITICAL, category, message, ctx, component)

    def log(self, level: LogLevel, message: str, category: LogCategory = LogCategory.STARTUP,
            context: Dict[str, Any] = None, component: str = None) -> None:
        self._write_log(level, category, message, context, component)


# ============ Global singleton and adapter ============

logger = UnifiedLogger()


class AppLoggerAdapter:
    """Domain-flavoured helpers on top of UnifiedLogger"""

    def __init__(self, logger_instance: UnifiedLogger):
        self._logger = logger_instance

    def debug(self, message: str, category: LogCategory = LogCategory.STARTUP,
              context: Dict[str, Any] = None, component: str = None) -> None:
        self._logger.debug(message, category, context, component)

    def info(self, message: str, category: LogCategory = LogCategory.STARTUP,
             context: Dict[str, Any] = None, component: str = None) -> None:
        self._logger.info(message, category, context, component)

    def warning(self, message: str, category: LogCategory = LogCategory.ERROR,
                context: Dict[str, Any] = None, component: str = None) -> None:
        self._logger.warning(message, category, context, component)

    def error(self, message: str, exception: Exception = None,
              category: LogCategory = LogCategory.ERROR,
              context: Dict[str, Any] = None, component: str = None) -> None:
        self._logger.error(message, exception, category, context, component)

    def log_tray_event(self, event: str, details: Dict[str, Any] = None) -> None:
        self._logger.info(f"Tray: {event}", LogCategory.TRAY, details, "tray")

    def log_http_event(self, event: str, details: Dict[str, Any] = None) -> None:
        self._logger.debug(f"HTTP: {event}", LogCategory.HTTP, details, "http")

    def log_lifecycle_event(self, event: str, details: Dict[str, Any] = None) -> None:
        self._logger.info(f"Lifecycle: {event}", LogCategory.LIFECYCLE, details, "lifecycle")

    def log_error(self, error: Exception, context: str) -> None:
        tb_str = ''.join(traceback.format_exception(type(error), error, error.__traceback__))

        self._logger.error(
            f"Error in {context}",
            error,
            LogCategory.ERROR,
            context={'traceback': tb_str, 'error_details': str(error)},
            component=context
        )

    def log_startup(self, details: Dict[str, Any] = None) -> None:
        self._logger.info("TrayNotifier starting up", LogCategory.STARTUP, details, "startup")

    def log_shutdown(self, exit_code: int = 0) -> None:
        self._logger.info("TrayNotifier shutting down", LogCategory.STARTUP,
                          {"exit_code": exit_code}, "shutdown")

    def is_debug_enabled(self) -> bool:
        return self._logger.is_debug_enabled()


app_logger = AppLoggerAdapter(logger)


def loguru_sink(message) -> None:
    """loguru sink writing into the unified log

    Install with ``loguru.logger.add(loguru_sink, format="{message}")`` so
    the HTTP listener logs end up in the same file as everything else.
    """
    record = message.record
    level = LogLevel.DEBUG
    for candidate in LogLevel:
        if candidate.value <= record["level"].no:
            level = candidate

    context = {"module": record["name"], "line": record["line"]}
    exc = record["exception"]
    if exc is not None and exc.value is not None:
        context["exception"] = str(exc.value)
        context["exception_type"] = exc.type.__name__
        context["traceback"] = ''.join(
            traceback.format_exception(exc.type, exc.value, exc.traceback)
        )

    logger.log(level, record["message"], LogCategory.HTTP, context, "http_listener")


__all__ = [
    'logger',
    'app_logger',
    'AppLoggerAdapter',
    'loguru_sink',
    'UnifiedLogger',
    'LogLevel',
    'LogCategory',
]
