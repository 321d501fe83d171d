"""Exception hierarchy for TrayNotifier

Structured errors with error codes, context information, severity levels
and recovery suggestions.
"""

import time
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorSeverity(Enum):
    """Error severity levels"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories"""

    CONFIGURATION = "configuration"
    NETWORK = "network"
    TRAY = "tray"
    SOUND = "sound"
    LIFECYCLE = "lifecycle"


class NotifierError(Exception):
    """Base exception for TrayNotifier

    Provides structured error information including:
    - Error codes for programmatic handling
    - Context information for debugging
    - Severity levels for appropriate response
    - Recovery suggestions for the operator
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        category: ErrorCategory = ErrorCategory.LIFECYCLE,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Args:
            message: Human-readable error message
            error_code: Unique error code for programmatic handling
            category: Error category for classification
            severity: Error severity level
            context: Additional context information
            recovery_suggestions: List of suggested recovery actions
            original_exception: Original exception if this is a wrapper
        """
        super().__init__(message)

        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        self.original_exception = original_exception
        self.timestamp = time.time()
        self.error_code = error_code or self._generate_error_code()

        if "component" not in self.context:
            self.context["component"] = self.__class__.__name__

    def _generate_error_code(self) -> str:
        return f"{self.__class__.__name__.upper()}_{int(self.timestamp)}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "context": self.context,
            "recovery_suggestions": self.recovery_suggestions,
            "timestamp": self.timestamp,
            "exception_type": self.__class__.__name__,
            "original_exception": str(self.original_exception)
            if self.original_exception
            else None,
        }

    def get_user_message(self) -> str:
        """Get operator-facing message with recovery suggestions"""
        user_msg = self.message
        if self.recovery_suggestions:
            suggestions = "\n".join(
                f"• {suggestion}" for suggestion in self.recovery_suggestions
            )
            user_msg += f"\n\nSuggested actions:\n{suggestions}"
        return user_msg

    def is_fatal(self) -> bool:
        return self.severity == ErrorSeverity.CRITICAL


class ConfigurationError(NotifierError):
    """Tray unavailable or default icon missing; raised at construction"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=kwargs.pop("severity", ErrorSeverity.CRITICAL),
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                [
                    "Check that a desktop session with a system tray is running",
                    "Check the default icon name against the bundled icons",
                ],
            ),
            **kwargs,
        )


class BindError(NotifierError):
    """The HTTP listener cannot bind its address"""

    def __init__(self, message: str, host: str = "", port: int = 0, **kwargs):
        context = kwargs.pop("context", {})
        context.update({"host": host, "port": port})

        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            severity=kwargs.pop("severity", ErrorSeverity.CRITICAL),
            context=context,
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                [
                    f"Check whether another process already listens on port {port}",
                    "Choose a different port on the command line",
                ],
            ),
            **kwargs,
        )
        self.host = host
        self.port = port


class TraySetupError(NotifierError):
    """The platform rejected the tray icon or a popup"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.TRAY,
            severity=kwargs.pop("severity", ErrorSeverity.HIGH),
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                ["Restart the desktop tray (panel) and start the notifier again"],
            ),
            **kwargs,
        )


class SoundError(NotifierError):
    """A notification sound action failed"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.SOUND,
            severity=kwargs.pop("severity", ErrorSeverity.LOW),
            **kwargs,
        )


def wrap_exception(
    original_exception: Exception, message: str = None, exception_type: type = None
) -> NotifierError:
    """Wrap a standard exception in the NotifierError hierarchy

    Args:
        original_exception: Original exception to wrap
        message: Optional custom message
        exception_type: Exception type to use for wrapping

    Returns:
        Wrapped exception
    """
    if isinstance(original_exception, NotifierError):
        return original_exception

    if exception_type is None:
        exception_type = NotifierError

    if message is None:
        message = str(original_exception)

    return exception_type(
        message=message,
        original_exception=original_exception,
        context={"original_type": type(original_exception).__name__},
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
]
