"""System tray widget - Qt implementation of ITrayBackend

Handles only the visual side of the tray icon. Calls may come from any
thread; they are forwarded to the Qt thread through queued signals.
"""

from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QSystemTrayIcon

from ....core.interfaces.tray import ClickCallback, ITrayBackend
from ....utils import app_logger, TraySetupError


def click_count_for(reason) -> Optional[int]:
    """Translate a Qt activation reason into a click count

    Returns:
        1 for a click, 2 for a double click, None for anything else
    """
    if reason == QSystemTrayIcon.ActivationReason.Trigger:
        return 1
    if reason == QSystemTrayIcon.ActivationReason.DoubleClick:
        return 2
    return None


class TrayWidget(QObject):
    """QSystemTrayIcon wrapper

    Must be created on the Qt thread after the QApplication.
    """

    # cross-thread forwarding (queued when emitted off the Qt thread)
    _icon_requested = Signal(str)
    _tooltip_requested = Signal(str)
    _message_requested = Signal(str, str)
    _visibility_requested = Signal(bool)

    def __init__(self, parent: Optional[QObject] = None, message_timeout: int = 10000):
        super().__init__(parent)

        self._message_timeout = message_timeout
        self._click_callback: Optional[ClickCallback] = None
        self._tray_icon = QSystemTrayIcon(self)
        self._tray_icon.activated.connect(self._on_icon_activated)

        self._icon_requested.connect(self._apply_icon)
        self._tooltip_requested.connect(self._tray_icon.setToolTip)
        self._message_requested.connect(self._apply_message)
        self._visibility_requested.connect(self._tray_icon.setVisible)

    # ==================== ITrayBackend ====================

    def is_available(self) -> bool:
        return QSystemTrayIcon.isSystemTrayAvailable()

    def show(self) -> None:
        if not QSystemTrayIcon.isSystemTrayAvailable():
            raise TraySetupError("System tray is not available")
        self._visibility_requested.emit(True)

    def hide(self) -> None:
        self._visibility_requested.emit(False)

    def set_icon(self, icon_path: Path) -> None:
        self._icon_requested.emit(str(icon_path))

    def set_tooltip(self, tooltip: str) -> None:
        self._tooltip_requested.emit(tooltip)

    def show_message(self, title: str, message: str) -> bool:
        if not QSystemTrayIcon.supportsMessages():
            return False
        self._message_requested.emit(title, message)
        return True

    def set_click_callback(self, callback: Optional[ClickCallback]) -> None:
        self._click_callback = callback

    # ==================== Qt thread ====================

    @Slot(str)
    def _apply_icon(self, icon_path: str) -> None:
        self._tray_icon.setIcon(QIcon(icon_path))

    @Slot(str, str)
    def _apply_message(self, title: str, message: str) -> None:
        self._tray_icon.showMessage(
            title, message, QSystemTrayIcon.MessageIcon.Information, self._message_timeout
        )

    def _on_icon_activated(self, reason) -> None:
        count = click_count_for(reason)
        if count is None or self._click_callback is None:
            return
        try:
            self._click_callback(count)
        except Exception as e:
            app_logger.log_error(e, "tray_icon_activation")

    def is_visible(self) -> bool:
        return self._tray_icon.isVisible()

    def cleanup(self) -> None:
        self._click_callback = None
        self._tray_icon.hide()


# QObject's metaclass cannot be combined with ABCMeta
ITrayBackend.register(TrayWidget)
