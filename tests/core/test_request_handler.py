"""Request Handler Tests

handle(path, body) -> status: 404 leaves the surface alone, 200 shows the
popup, swaps the icon and plays the sound.
"""

import threading
from datetime import datetime
from unittest.mock import Mock

import pytest

from traynotifier.core.request_handler import RequestHandler, decode_message, format_time
from traynotifier.core.sound import SoundTrigger
from traynotifier.core.surface import NotificationSurface

FIXED_TIME = datetime(2024, 5, 17, 9, 41, 7)
TIME_STR = FIXED_TIME.strftime("%X")


@pytest.fixture
def surface(mock_tray, resolver):
    return NotificationSurface(mock_tray, resolver.resolve("sun"))


@pytest.fixture
def sound_action():
    return Mock()


@pytest.fixture
def handler(resolver, surface, output_lines, sound_action):
    return RequestHandler(
        resolver,
        surface,
        SoundTrigger("win.sound.asterisk", sound_action),
        output=output_lines.append,
        clock=lambda: FIXED_TIME,
    )


class TestDecodeMessage:
    def test_empty_body_uses_placeholder(self):
        assert decode_message(b"") == "New notification arrived."

    def test_blank_lines_only_use_placeholder(self):
        assert decode_message(b"\n") == "New notification arrived."
        assert decode_message(b"\r\n\r\n") == "New notification arrived."

    def test_single_line(self):
        assert decode_message(b"hello") == "hello"

    def test_lines_are_rejoined_with_newline(self):
        assert decode_message(b"first\r\nsecond\rthird\nfourth") == "first\nsecond\nthird\nfourth"

    def test_trailing_newline_is_dropped(self):
        assert decode_message(b"build done\n") == "build done"

    def test_inner_blank_lines_are_kept(self):
        assert decode_message(b"a\n\nb") == "a\n\nb"

    def test_leading_blank_lines_are_dropped(self):
        assert decode_message(b"\n\nhello\nworld") == "hello\nworld"

    def test_utf8(self):
        assert decode_message("Sestavení hotovo ✓".encode("utf-8")) == "Sestavení hotovo ✓"

    def test_malformed_utf8_is_replaced(self):
        assert decode_message(b"ok \xff\xfe done") == "ok \ufffd\ufffd done"


class TestFormatTime:
    def test_medium_precision(self):
        assert format_time(FIXED_TIME) == FIXED_TIME.strftime("%X")


class TestUnknownIcon:
    def test_returns_404(self, handler):
        assert handler.handle("/missing", b"hello") == 404

    def test_surface_unchanged(self, handler, surface, mock_tray, output_lines, sound_action):
        before = surface.current_image
        mock_tray.calls.clear()

        handler.handle("/missing", b"hello")

        assert surface.current_image == before
        assert mock_tray.calls == []
        assert mock_tray.messages == []
        assert output_lines == []
        sound_action.assert_not_called()

    @pytest.mark.parametrize("path", ["", "/", "/../sun", "/sun.png"])
    def test_odd_paths(self, handler, path):
        assert handler.handle(path, b"") == 404


class TestKnownIcon:
    def test_returns_200(self, handler):
        assert handler.handle("/moon", b"hello") == 200

    def test_image_becomes_resolved_icon(self, handler, surface, resolver, mock_tray):
        handler.handle("/moon", b"hello")

        assert surface.current_image == resolver.resolve("moon")
        assert mock_tray.icon_path == resolver.resolve("moon").path

    def test_log_line(self, handler, output_lines):
        handler.handle("/sun", b"hello")

        assert output_lines == [f"{TIME_STR} hello"]

    def test_popup(self, handler, mock_tray):
        handler.handle("/sun", b"line one\nline two")

        assert mock_tray.messages == [(f"Notification {TIME_STR}", "line one\nline two")]

    def test_placeholder_popup(self, handler, mock_tray, output_lines):
        handler.handle("/sun", b"")

        assert output_lines == [f"{TIME_STR} New notification arrived."]
        assert mock_tray.messages[-1][1] == "New notification arrived."

    def test_sound_is_played(self, handler, sound_action):
        handler.handle("/sun", b"")

        sound_action.assert_called_once_with()

    def test_order_display_then_image(self, handler, mock_tray):
        mock_tray.calls.clear()

        handler.handle("/error", b"failed")

        assert [op for _, op in mock_tray.calls] == ["show_message", "set_icon"]

    def test_without_sound(self, resolver, surface, output_lines):
        handler = RequestHandler(resolver, surface, None, output=output_lines.append)

        assert handler.handle("/sun", b"quiet") == 200
        assert output_lines[0].endswith(" quiet")


class TestBestEffortFailures:
    def test_sound_failure_does_not_abort(self, handler, sound_action, surface, resolver):
        sound_action.side_effect = RuntimeError("no audio device")

        assert handler.handle("/moon", b"hello") == 200
        assert surface.current_image == resolver.resolve("moon")

    def test_popup_failure_does_not_abort(self, handler, mock_tray, surface, resolver):
        mock_tray.fail_message = True

        assert handler.handle("/moon", b"hello") == 200
        assert surface.current_image == resolver.resolve("moon")

    def test_icon_change_failure_does_not_abort(
        self, handler, mock_tray, surface, resolver, output_lines, sound_action
    ):
        mock_tray.fail_icon = True

        assert handler.handle("/moon", b"hi") == 200
        # popup, log line and sound still happen; the icon stays as it was
        assert mock_tray.messages[-1][1] == "hi"
        assert output_lines[-1].endswith(" hi")
        sound_action.assert_called_once_with()
        assert surface.current_image == resolver.resolve("sun")

    def test_closed_output_does_not_abort(self, resolver, surface):
        output = Mock(side_effect=ValueError("I/O operation on closed file"))
        handler = RequestHandler(resolver, surface, output=output)

        assert handler.handle("/sun", b"hello") == 200


class TestConcurrency:
    def test_request_effects_are_not_interleaved(self, handler, mock_tray, resolver, surface):
        names = ["sun", "moon", "error", "ok", "info", "cloud"]
        mock_tray.calls.clear()
        statuses = []
        statuses_lock = threading.Lock()

        def worker(name):
            for _ in range(10):
                status = handler.handle(f"/{name}", name.encode())
                with statuses_lock:
                    statuses.append(status)

        threads = [threading.Thread(target=worker, args=(n,)) for n in names]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert statuses == [200] * 60

        # every popup is immediately followed by the same thread's image change
        calls = mock_tray.calls
        assert len(calls) == 120
        for i in range(0, len(calls), 2):
            (popup_thread, popup_op), (icon_thread, icon_op) = calls[i], calls[i + 1]
            assert (popup_op, icon_op) == ("show_message", "set_icon")
            assert popup_thread == icon_thread

        # last writer wins
        assert surface.current_image.path == mock_tray.icon_path
        assert surface.current_image in {resolver.resolve(n) for n in names}
