"""Notification Surface Tests

The surface owns the tray icon state: current image, attachment and the
click policy (1 = reset, 2 = shutdown).
"""

import threading

import pytest
from unittest.mock import Mock

from traynotifier.core.surface import NotificationSurface, build_tooltip
from traynotifier.utils import TraySetupError


@pytest.fixture
def images(resolver):
    return {name: resolver.resolve(name) for name in ("sun", "moon", "error")}


@pytest.fixture
def surface(mock_tray, images):
    return NotificationSurface(mock_tray, images["sun"], tooltip=build_tooltip(8811))


class TestConstruction:
    def test_default_image_is_set(self, surface, mock_tray, images):
        assert surface.current_image == images["sun"]
        assert surface.default_image == images["sun"]
        assert mock_tray.icon_path == images["sun"].path

    def test_not_attached_initially(self, surface, mock_tray):
        assert surface.is_attached is False
        assert mock_tray.visible is False

    def test_tooltip(self, surface, mock_tray):
        assert mock_tray.tooltip == (
            "Notifier on port 8811\n- click to remove events\n- double-click to exit"
        )

    def test_click_callback_is_registered(self, surface, mock_tray):
        assert mock_tray.click_callback == surface.on_click


class TestAttachment:
    def test_attach(self, surface, mock_tray):
        surface.attach()

        assert surface.is_attached is True
        assert mock_tray.visible is True

    def test_attach_twice_registers_once(self, surface, mock_tray):
        surface.attach()
        surface.attach()

        assert mock_tray.show_count == 1

    def test_detach(self, surface, mock_tray):
        surface.attach()
        surface.detach()

        assert surface.is_attached is False
        assert mock_tray.visible is False

    def test_detach_when_detached_is_noop(self, surface, mock_tray):
        surface.detach()

        assert mock_tray.hide_count == 0

    def test_attach_rejected(self, surface, mock_tray):
        mock_tray.fail_show = True

        with pytest.raises(TraySetupError):
            surface.attach()
        assert surface.is_attached is False

    def test_attach_when_tray_vanished(self, surface, mock_tray):
        mock_tray.available = False

        with pytest.raises(TraySetupError):
            surface.attach()

    def test_unexpected_backend_error_is_wrapped(self, surface, mock_tray):
        mock_tray.show = Mock(side_effect=RuntimeError("no more icons"))

        with pytest.raises(TraySetupError) as exc_info:
            surface.attach()
        assert isinstance(exc_info.value.original_exception, RuntimeError)


class TestVisuals:
    def test_set_image(self, surface, mock_tray, images):
        surface.set_image(images["moon"])

        assert surface.current_image == images["moon"]
        assert mock_tray.icon_path == images["moon"].path

    def test_reset(self, surface, mock_tray, images):
        surface.set_image(images["error"])
        surface.reset()

        assert surface.current_image == images["sun"]
        assert mock_tray.icon_path == images["sun"].path

    def test_display(self, surface, mock_tray):
        assert surface.display("Notification 10:00:00", "build done") is True
        assert mock_tray.messages == [("Notification 10:00:00", "build done")]

    def test_display_failure_is_swallowed(self, surface, mock_tray):
        mock_tray.fail_message = True

        assert surface.display("title", "body") is False


class TestClickPolicy:
    def test_single_click_resets(self, surface, mock_tray, images):
        surface.set_image(images["moon"])

        mock_tray.click(1)

        assert surface.current_image == images["sun"]

    def test_double_click_shuts_down(self, surface, mock_tray, images):
        shutdown = Mock()
        surface.set_shutdown_action(shutdown)
        surface.set_image(images["moon"])

        mock_tray.click(2)

        shutdown.assert_called_once_with()
        # no reset on double click
        assert surface.current_image == images["moon"]

    def test_double_click_without_action(self, surface, mock_tray):
        mock_tray.click(2)

    @pytest.mark.parametrize("count", [0, 3, 5])
    def test_other_counts_are_ignored(self, surface, mock_tray, images, count):
        shutdown = Mock()
        surface.set_shutdown_action(shutdown)
        surface.set_image(images["moon"])

        mock_tray.click(count)

        shutdown.assert_not_called()
        assert surface.current_image == images["moon"]

    def test_shutdown_action_runs_outside_the_lock(self, surface, mock_tray):
        """Another thread must be able to take the lock during shutdown"""
        acquired = []

        def shutdown():
            t = threading.Thread(target=lambda: acquired.append(surface.is_attached))
            t.start()
            t.join(timeout=2)

        surface.set_shutdown_action(shutdown)
        mock_tray.click(2)

        assert acquired == [False]


class TestExclusive:
    def test_exclusive_blocks_other_threads(self, surface, images):
        entered = threading.Event()
        release = threading.Event()
        seen = []

        def holder():
            with surface.exclusive():
                entered.set()
                release.wait(timeout=2)
                seen.append("holder")

        def writer():
            surface.set_image(images["moon"])
            seen.append("writer")

        t1 = threading.Thread(target=holder)
        t1.start()
        entered.wait(timeout=2)
        t2 = threading.Thread(target=writer)
        t2.start()
        t2.join(timeout=0.2)
        assert seen == []

        release.set()
        t1.join(timeout=2)
        t2.join(timeout=2)

        assert seen == ["holder", "writer"]

    def test_exclusive_is_reentrant(self, surface, images):
        with surface.exclusive():
            with surface.exclusive():
                surface.set_image(images["moon"])

        assert surface.current_image == images["moon"]
