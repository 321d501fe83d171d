"""Core interface definitions

Services depend on these interfaces, not on the Qt implementations.
"""

from .lifecycle import ComponentState
from .sound import IDesktopProperties, SoundAction
from .tray import ClickCallback, ITrayBackend

__all__ = [
    "ClickCallback",
    "ComponentState",
    "IDesktopProperties",
    "ITrayBackend",
    "SoundAction",
]
