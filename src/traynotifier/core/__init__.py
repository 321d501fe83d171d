"""Core notifier components"""

from .assets import AssetResolver, IconImage
from .config import NotifierConfig
from .interfaces import ComponentState
from .notifier import Notifier
from .request_handler import RequestHandler
from .sound import PlatformDesktopProperties, SoundTrigger, resolve_sound
from .surface import NotificationSurface

__all__ = [
    "AssetResolver",
    "ComponentState",
    "IconImage",
    "NotificationSurface",
    "Notifier",
    "NotifierConfig",
    "PlatformDesktopProperties",
    "RequestHandler",
    "SoundTrigger",
    "resolve_sound",
]
