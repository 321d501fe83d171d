"""Notifier - HTTP listener and tray icon as one lifecycle unit

The tray icon is in the system tray exactly while the listener is bound
and serving; start() and stop() switch both together.
"""

import sys
from datetime import datetime
from typing import Callable, Optional

from .assets import AssetResolver
from .base.lifecycle_component import LifecycleComponent
from .config import NotifierConfig
from .interfaces.sound import IDesktopProperties
from .interfaces.tray import ITrayBackend
from .request_handler import RequestHandler
from .sound import SoundTrigger, resolve_sound
from .surface import NotificationSurface, build_tooltip
from ..server.http_listener import HttpListener
from ..utils import app_logger, ConfigurationError, TraySetupError
from ..utils.constants import ExitCodes

ExitHandler = Callable[[int], None]


def _default_exit(code: int) -> None:
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is not None:
        app.exit(code)
    else:
        sys.exit(code)


def _default_tray() -> ITrayBackend:
    from ..ui.components.system_tray import TrayWidget

    return TrayWidget()


class Notifier(LifecycleComponent):
    """Local notification relay

    Example:
        >>> notifier = Notifier(NotifierConfig.create(port=8811))
        >>> notifier.start()
        >>> # POST "build done" to http://localhost:8811/sun
        >>> notifier.stop()
    """

    def __init__(
        self,
        config: Optional[NotifierConfig] = None,
        tray: Optional[ITrayBackend] = None,
        resolver: Optional[AssetResolver] = None,
        desktop_properties: Optional[IDesktopProperties] = None,
        exit_handler: Optional[ExitHandler] = None,
        output: Optional[Callable[[str], None]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Args:
            config: settings; defaults apply when omitted
            tray: tray backend; the Qt tray widget when omitted
            resolver: icon lookup; the bundled icons when omitted
            desktop_properties: source of the notification sound
            exit_handler: terminates the process after a double click
            output: receives one ``"<time> <message>"`` line per notification
            clock: wall clock used for notification timestamps

        Raises:
            ConfigurationError: no system tray, or the default icon is missing
        """
        super().__init__("notifier")

        self._config = config or NotifierConfig.create()
        self._tray = tray if tray is not None else _default_tray()
        if not self._tray.is_available():
            raise ConfigurationError("System tray not supported!")

        self._resolver = resolver or AssetResolver()
        default_image = self._resolver.resolve(self._config.default_icon)
        if default_image is None:
            raise ConfigurationError(
                f"Wrong default icon - {self._config.default_icon}",
                context={"icon": self._config.default_icon, "root": str(self._resolver.root)},
            )

        self._sound = resolve_sound(self._config.sound_property, desktop_properties)
        self._exit_handler = exit_handler or _default_exit

        self._surface = NotificationSurface(
            self._tray,
            default_image,
            tooltip=build_tooltip(self._config.port),
            shutdown_action=self.shutdown,
        )
        self._handler = RequestHandler(
            self._resolver, self._surface, self._sound, output=output, clock=clock
        )
        self._listener: Optional[HttpListener] = None

    # ==================== Accessors ====================

    @property
    def config(self) -> NotifierConfig:
        return self._config

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def surface(self) -> NotificationSurface:
        return self._surface

    @property
    def handler(self) -> RequestHandler:
        return self._handler

    @property
    def sound(self) -> Optional[SoundTrigger]:
        return self._sound

    # ==================== Lifecycle ====================

    def _do_start(self) -> None:
        listener = HttpListener(self._config.host, self._config.port, self._handler.handle)
        listener.start()

        try:
            with self._surface.exclusive():
                self._surface.attach()
        except TraySetupError:
            listener.stop(0)
            raise

        self._listener = listener

    def _do_stop(self) -> None:
        if self._listener is not None:
            self._listener.stop(self._config.stop_grace_period)
            self._listener = None

        with self._surface.exclusive():
            self._surface.detach()

    def shutdown(self, exit_code: int = ExitCodes.OK) -> None:
        """Stop everything and terminate the process"""
        app_logger.log_shutdown(exit_code)
        self.stop()
        self._exit_handler(exit_code)
