"""System tray component module

Qt rendering of the tray icon. The click policy lives in
``traynotifier.core.surface``.
"""

from .tray_widget import TrayWidget, click_count_for

__all__ = [
    "TrayWidget",
    "click_count_for",
]
