"""Notifier configuration"""

from dataclasses import dataclass
from typing import Any, Optional

from ..utils.constants import Defaults


@dataclass(frozen=True)
class NotifierConfig:
    """Immutable settings of one Notifier instance

    Use :meth:`create` to apply the fallback rules; the constructor takes
    the values as given.
    """

    port: int = Defaults.PORT
    default_icon: str = Defaults.ICON
    sound_property: str = Defaults.SOUND_PROPERTY
    host: str = Defaults.HOST
    stop_grace_period: float = Defaults.STOP_GRACE_PERIOD

    @classmethod
    def create(
        cls,
        port: Any = None,
        default_icon: Optional[str] = None,
        sound_property: Optional[str] = None,
        host: Optional[str] = None,
        stop_grace_period: Optional[float] = None,
    ) -> "NotifierConfig":
        """Build a config, replacing missing or invalid values with defaults

        Args:
            port: listener port; anything that is not a positive integer
                falls back to ``Defaults.PORT``
            default_icon: icon shown at startup and after a click
            sound_property: desktop property holding the notification sound
            host: bind address, empty for all interfaces
            stop_grace_period: seconds stop() waits for in-flight requests
        """
        return cls(
            port=normalize_port(port),
            default_icon=default_icon if default_icon is not None else Defaults.ICON,
            sound_property=(
                sound_property if sound_property is not None else Defaults.SOUND_PROPERTY
            ),
            host=host if host is not None else Defaults.HOST,
            stop_grace_period=(
                stop_grace_period
                if stop_grace_period is not None and stop_grace_period >= 0
                else Defaults.STOP_GRACE_PERIOD
            ),
        )


def normalize_port(port: Any) -> int:
    """Return ``port`` as a positive int, or the default port"""
    if isinstance(port, bool):
        return Defaults.PORT
    try:
        value = int(port)
    except (TypeError, ValueError):
        return Defaults.PORT
    return value if value > 0 else Defaults.PORT
