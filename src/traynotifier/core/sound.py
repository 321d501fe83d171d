"""Notification sound resolution

The sound is looked up once, by desktop property name, when the Notifier
is constructed. On platforms that do not define the property there is no
sound at all.
"""

import sys
from typing import Any, Dict, Optional

try:
    import winsound
except ImportError:
    winsound = None

from .interfaces.sound import IDesktopProperties, SoundAction
from ..utils import app_logger, LogCategory, SoundError


# win.sound.* property -> MessageBeep type
_WINDOWS_SOUNDS = {
    "win.sound.asterisk": "MB_ICONASTERISK",
    "win.sound.default": "MB_OK",
    "win.sound.exclamation": "MB_ICONEXCLAMATION",
    "win.sound.hand": "MB_ICONHAND",
    "win.sound.question": "MB_ICONQUESTION",
}


def _message_beep(beep_type: int) -> SoundAction:
    def play() -> None:
        winsound.MessageBeep(beep_type)

    return play


class PlatformDesktopProperties(IDesktopProperties):
    """Desktop properties of the running platform

    Only the Windows system sounds are provided; elsewhere every lookup
    returns None.
    """

    def __init__(self, platform: Optional[str] = None):
        self._platform = platform or sys.platform
        self._properties: Dict[str, Any] = {}

        if self._platform == "win32" and winsound is not None:
            for name, beep_name in _WINDOWS_SOUNDS.items():
                self._properties[name] = _message_beep(getattr(winsound, beep_name))

    def get_property(self, name: str) -> Optional[Any]:
        return self._properties.get(name)


class StaticDesktopProperties(IDesktopProperties):
    """Fixed property table, for embedding and tests"""

    def __init__(self, properties: Optional[Dict[str, Any]] = None):
        self._properties = dict(properties or {})

    def get_property(self, name: str) -> Optional[Any]:
        return self._properties.get(name)


class SoundTrigger:
    """Best-effort wrapper around a resolved sound action"""

    def __init__(self, property_name: str, action: SoundAction):
        self._property_name = property_name
        self._action = action

    @property
    def property_name(self) -> str:
        return self._property_name

    def play(self) -> bool:
        """Play the sound; failures are logged, never raised

        Returns:
            True if the action completed
        """
        try:
            self._action()
            return True
        except Exception as e:
            error = SoundError(
                f"Sound '{self._property_name}' failed: {e}",
                original_exception=e,
                context={"property": self._property_name},
            )
            app_logger.warning(error.message, LogCategory.SOUND, error.context, "sound")
            return False


def resolve_sound(
    property_name: str, properties: Optional[IDesktopProperties] = None
) -> Optional[SoundTrigger]:
    """Resolve the notification sound from a desktop property

    Returns:
        A SoundTrigger, or None if the property is missing or not callable
    """
    provider = properties if properties is not None else PlatformDesktopProperties()
    value = provider.get_property(property_name)

    if value is None or not callable(value):
        app_logger.info(
            "No notification sound",
            LogCategory.SOUND,
            {"property": property_name, "found": value is not None},
            "sound",
        )
        return None

    return SoundTrigger(property_name, value)
