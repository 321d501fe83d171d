"""Notification surface - the tray icon as seen by the notifier

Owns the visual state of the tray icon (current image, attachment) and the
pointer policy:
- single click: return to the default icon
- double click: shut the notifier down

Every mutation goes through one re-entrant lock. Request worker threads,
the UI thread and the lifecycle controller all share it.
"""

import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from .assets import IconImage
from .interfaces.tray import ITrayBackend
from ..utils import app_logger, LogCategory, TraySetupError, wrap_exception
from ..utils.constants import Messages


class NotificationSurface:
    """Thread-safe facade over an ITrayBackend"""

    def __init__(
        self,
        tray: ITrayBackend,
        default_image: IconImage,
        tooltip: str = "",
        shutdown_action: Optional[Callable[[], None]] = None,
    ):
        """
        Args:
            tray: platform tray backend
            default_image: image shown initially and after a single click
            tooltip: tooltip text of the icon
            shutdown_action: invoked on double click
        """
        self._component_name = "notification_surface"
        self._lock = threading.RLock()
        self._tray = tray
        self._default_image = default_image
        self._current_image = default_image
        self._attached = False
        self._shutdown_action = shutdown_action

        self._tray.set_icon(default_image.path)
        if tooltip:
            self._tray.set_tooltip(tooltip)
        self._tray.set_click_callback(self.on_click)

    # ==================== State ====================

    @property
    def current_image(self) -> IconImage:
        with self._lock:
            return self._current_image

    @property
    def default_image(self) -> IconImage:
        return self._default_image

    @property
    def is_attached(self) -> bool:
        with self._lock:
            return self._attached

    @contextmanager
    def exclusive(self) -> Iterator["NotificationSurface"]:
        """Hold the surface lock across several operations"""
        with self._lock:
            yield self

    def set_shutdown_action(self, action: Optional[Callable[[], None]]) -> None:
        with self._lock:
            self._shutdown_action = action

    # ==================== Tray attachment ====================

    def attach(self) -> None:
        """Register the icon with the tray

        Raises:
            TraySetupError: the tray rejected the icon
        """
        with self._lock:
            if self._attached:
                return
            if not self._tray.is_available():
                raise TraySetupError("System tray is no longer available")
            try:
                self._tray.show()
            except TraySetupError:
                raise
            except Exception as e:
                raise wrap_exception(
                    e, f"Adding the tray icon failed: {e}", TraySetupError
                ) from e
            self._attached = True
            app_logger.log_tray_event("Icon attached", {"icon": self._current_image.name})

    def detach(self) -> None:
        with self._lock:
            if not self._attached:
                return
            self._tray.hide()
            self._attached = False
            app_logger.log_tray_event("Icon detached")

    # ==================== Visuals ====================

    def display(self, title: str, body: str) -> bool:
        """Show a popup; never raises

        Returns:
            True if the platform accepted the popup
        """
        with self._lock:
            try:
                return self._tray.show_message(title, body)
            except Exception as e:
                app_logger.warning(
                    f"Popup failed: {e}",
                    LogCategory.TRAY,
                    {"title": title, "exception_type": type(e).__name__},
                    self._component_name,
                )
                return False

    def set_image(self, image: IconImage) -> None:
        with self._lock:
            self._tray.set_icon(image.path)
            self._current_image = image

    def reset(self) -> None:
        self.set_image(self._default_image)

    # ==================== Pointer policy ====================

    def on_click(self, click_count: int) -> None:
        """Apply the click policy; classification is the toolkit's job

        Args:
            click_count: 1 for a click, 2 for a double click
        """
        app_logger.log_tray_event("Icon clicked", {"click_count": click_count})

        if click_count == 1:
            self.reset()
        elif click_count == 2:
            with self._lock:
                action = self._shutdown_action
            # outside the lock: shutdown waits for in-flight requests
            if action is not None:
                action()


def build_tooltip(port: int) -> str:
    return Messages.TOOLTIP.format(port=port)
