"""Application constants

Central place for defaults, resource paths and user-visible strings.
"""


# ==================== Application info ====================
class AppInfo:
    """Basic application information"""

    NAME = "TrayNotifier"
    VERSION = "1.0.0"
    DESCRIPTION = "HTTP to system tray notification relay"


# ==================== Defaults ====================
class Defaults:
    """Fallback values for NotifierConfig"""

    PORT = 8811
    ICON = "sun"
    SOUND_PROPERTY = "win.sound.asterisk"
    # all interfaces
    HOST = ""
    # seconds stop() waits for in-flight requests
    STOP_GRACE_PERIOD = 1.0


# ==================== Paths ====================
class Paths:
    """Resource locations (relative to the traynotifier package)"""

    ICON_DIR = "resources/icons"
    ICON_SUFFIX = ".png"


# ==================== Messages ====================
class Messages:
    """User-visible strings"""

    PLACEHOLDER = "New notification arrived."
    POPUP_TITLE = "Notification {time}"
    TOOLTIP = (
        "Notifier on port {port}"
        "\n- click to remove events"
        "\n- double-click to exit"
    )
    USAGE = "$ traynotifier [port [defaultIcon [soundDesktopProperty]]]"
    WRONG_PORT = "Wrong port number provided. Default will be used."


# ==================== HTTP ====================
class HttpStatus:
    OK = 200
    NOT_FOUND = 404
    INTERNAL_ERROR = 500


# ==================== Exit codes ====================
class ExitCodes:
    OK = 0
    STARTUP_FAILURE = 1
