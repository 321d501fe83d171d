"""TrayNotifier - HTTP to system tray notification relay

Scripts and build tools POST a message to ``http://localhost:<port>/<icon>``;
the notifier pops up a tray notification and switches the tray icon.
"""

__version__ = "1.0.0"
__description__ = "TrayNotifier"

from .core.notifier import Notifier
from .core.config import NotifierConfig
from .utils import app_logger

__all__ = ["Notifier", "NotifierConfig", "app_logger"]
