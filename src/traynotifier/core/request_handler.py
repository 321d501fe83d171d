"""Notification request handling

One call per HTTP request: the path selects the icon, the body carries the
message text.
"""

import re
from datetime import datetime
from typing import Callable, Optional

from .assets import AssetResolver
from .sound import SoundTrigger
from .surface import NotificationSurface
from ..utils import app_logger, LogCategory
from ..utils.constants import HttpStatus, Messages

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _print_line(line: str) -> None:
    print(line, flush=True)


def decode_message(body: bytes) -> str:
    """Turn a request body into notification text

    The body is decoded as UTF-8 (malformed bytes become U+FFFD), split on
    any line terminator and rejoined with ``\\n``. A trailing terminator does
    not add an empty line and blank lines before the first text are
    dropped. An empty result is replaced by the placeholder message.
    """
    text = body.decode("utf-8", errors="replace") if body else ""

    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()

    message = ""
    for line in lines:
        if message:
            message += "\n"
        message += line

    return message or Messages.PLACEHOLDER


def format_time(moment: datetime) -> str:
    """Locale time representation, seconds precision"""
    return moment.strftime("%X")


class RequestHandler:
    """Maps (path, body) onto surface updates and a status code"""

    def __init__(
        self,
        resolver: AssetResolver,
        surface: NotificationSurface,
        sound: Optional[SoundTrigger] = None,
        output: Optional[Callable[[str], None]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._resolver = resolver
        self._surface = surface
        self._sound = sound
        self._output = output or _print_line
        self._clock = clock

    def handle(self, path: str, body: bytes = b"") -> int:
        """Handle one notification request

        Args:
            path: request path, e.g. ``/sun``
            body: raw request payload

        Returns:
            200 if the icon exists and the notification was shown, else 404
        """
        image = self._resolver.resolve(path)
        if image is None:
            app_logger.log_http_event("Unknown icon", {"path": path})
            return HttpStatus.NOT_FOUND

        message = decode_message(body)
        time_str = format_time(self._clock())
        try:
            self._output(f"{time_str} {message}")
        except (OSError, ValueError) as e:
            # stdout closed or detached
            app_logger.warning(f"Cannot write notification line: {e}")

        with self._surface.exclusive():
            self._surface.display(Messages.POPUP_TITLE.format(time=time_str), message)
            try:
                self._surface.set_image(image)
            except Exception as e:
                app_logger.warning(
                    f"Icon change failed: {e}",
                    LogCategory.TRAY,
                    {"icon": image.name, "exception_type": type(e).__name__},
                    "request_handler",
                )
            if self._sound is not None:
                self._sound.play()

        app_logger.log_http_event(
            "Notification shown", {"icon": image.name, "length": len(message)}
        )
        return HttpStatus.OK
