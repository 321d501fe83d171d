"""pytest configuration and shared fixtures"""
import os
import socket
import sys
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

# Keep test logs out of the user's data directory
os.environ.setdefault("TRAYNOTIFIER_LOG_DIR", tempfile.mkdtemp(prefix="traynotifier-logs-"))

# Add src and the tests directory (for mocks) to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from traynotifier.core import AssetResolver, Notifier, NotifierConfig  # noqa: E402
from traynotifier.core.sound import StaticDesktopProperties  # noqa: E402

from mocks import MockTrayBackend  # noqa: E402

FIXED_TIME = datetime(2024, 5, 17, 14, 3, 9)


def find_free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


# ============= Mock Fixtures =============

@pytest.fixture
def mock_tray():
    """Tray backend recording every call"""
    return MockTrayBackend()


@pytest.fixture
def resolver():
    """Resolver over the bundled icons"""
    return AssetResolver()


@pytest.fixture
def icon_dir(tmp_path):
    """Icon root with a few fake PNG files"""
    root = tmp_path / "icons"
    root.mkdir()
    for name in ("sun", "moon", "Build"):
        (root / f"{name}.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "nested").mkdir()
    (root / "nested" / "deep.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (tmp_path / "secret.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    return root


@pytest.fixture
def free_port():
    return find_free_port()


# ============= Notifier Fixtures =============

@pytest.fixture
def output_lines():
    """Collects the per-notification standard output lines"""
    return []


@pytest.fixture
def exit_codes():
    """Collects exit codes instead of terminating the test process"""
    return []


@pytest.fixture
def make_notifier(mock_tray, output_lines, exit_codes, free_port):
    """Factory for notifiers wired to the mock tray on a free port"""
    created = []

    def factory(**overrides):
        config = overrides.pop(
            "config",
            NotifierConfig.create(port=free_port, host="127.0.0.1", stop_grace_period=0.5),
        )
        kwargs = {
            "tray": mock_tray,
            "desktop_properties": StaticDesktopProperties(),
            "exit_handler": exit_codes.append,
            "output": output_lines.append,
            "clock": lambda: FIXED_TIME,
        }
        kwargs.update(overrides)
        notifier = Notifier(config, **kwargs)
        created.append(notifier)
        return notifier

    yield factory

    for notifier in created:
        notifier.stop()


@pytest.fixture
def notifier(make_notifier):
    return make_notifier()


@pytest.fixture
def running_notifier(notifier):
    notifier.start()
    return notifier
