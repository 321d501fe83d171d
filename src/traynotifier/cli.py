"""Command line entry point

Usage:
  traynotifier [port [defaultIcon [soundDesktopProperty]]]
  traynotifier 8899 ok --console-log --log-level debug
"""

import argparse
import signal
import sys
from typing import List, Optional

from loguru import logger as loguru_logger

from . import __version__
from .core.config import NotifierConfig
from .core.notifier import Notifier
from .utils import app_logger, logger, loguru_sink, NotifierError
from .utils.constants import AppInfo, ExitCodes, Messages

# Qt application of the running notifier, for the signal handler
_qt_app_instance = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="traynotifier", description=AppInfo.DESCRIPTION)
    parser.add_argument("port", nargs="?", help="HTTP port (default 8811)")
    parser.add_argument("default_icon", nargs="?", help="icon shown at startup (default sun)")
    parser.add_argument(
        "sound_property",
        nargs="?",
        help="desktop property with the notification sound (default win.sound.asterisk)",
    )
    parser.add_argument("--host", default=None, help="bind address (default: all interfaces)")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error", "critical"],
        help="minimum level written to the log file",
    )
    parser.add_argument("--console-log", action="store_true", help="also log to the console")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_port(value: Optional[str]) -> Optional[int]:
    """Parse the port argument; a malformed value is reported and dropped"""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        print(Messages.WRONG_PORT, file=sys.stderr)
        return None


def build_config(args: argparse.Namespace) -> NotifierConfig:
    return NotifierConfig.create(
        port=parse_port(args.port),
        default_icon=args.default_icon,
        sound_property=args.sound_property,
        host=args.host,
    )


def configure_logging(args: argparse.Namespace) -> int:
    """Apply the logging options and route loguru into the unified log

    Returns:
        Id of the loguru handler
    """
    if args.log_level:
        logger.set_log_level(args.log_level)
    if args.console_log:
        logger.set_console_output(True)

    # drop the default stderr handler; console output follows --console-log
    loguru_logger.remove()
    return loguru_logger.add(loguru_sink, level="DEBUG", format="{message}")


def print_usage() -> None:
    print("Usage:")
    print(Messages.USAGE)
    print()


def handle_shutdown(signum, frame):
    """Quit the Qt event loop on SIGINT/SIGTERM"""
    print("\n[SHUTDOWN] Received shutdown signal, cleaning up...")
    if _qt_app_instance is not None:
        _qt_app_instance.quit()
    else:
        sys.exit(ExitCodes.OK)


def run(argv: Optional[List[str]] = None) -> int:
    """Start the notifier and run the Qt event loop

    Returns:
        Process exit code
    """
    global _qt_app_instance

    print_usage()
    args = build_parser().parse_args(argv)
    configure_logging(args)
    config = build_config(args)

    from PySide6.QtCore import QTimer
    from PySide6.QtWidgets import QApplication

    qt_app = QApplication.instance()
    if qt_app is None:
        qt_app = QApplication(sys.argv[:1])
    # tray-only application, no windows
    qt_app.setQuitOnLastWindowClosed(False)

    app_logger.log_startup(
        {"port": config.port, "default_icon": config.default_icon, "sound": config.sound_property}
    )

    notifier = None
    try:
        notifier = Notifier(config)
        notifier.start()
    except NotifierError as e:
        app_logger.log_error(e, "startup")
        print(f"ERROR: {e.get_user_message()}", file=sys.stderr)
        if notifier is not None:
            notifier.stop()
        return ExitCodes.STARTUP_FAILURE

    _qt_app_instance = qt_app
    signal.signal(signal.SIGINT, handle_shutdown)
    signal.signal(signal.SIGTERM, handle_shutdown)
    # wake the event loop now and then so Python sees pending signals
    signal_timer = QTimer()
    signal_timer.start(200)
    signal_timer.timeout.connect(lambda: None)

    try:
        exit_code = qt_app.exec()
    finally:
        signal_timer.stop()
        notifier.stop()
        _qt_app_instance = None

    return exit_code


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
