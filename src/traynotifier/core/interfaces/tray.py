"""Tray backend interface"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

# Receives the click count classified by the UI toolkit (1 = click, 2 = double click)
ClickCallback = Callable[[int], None]


class ITrayBackend(ABC):
    """Platform system tray icon

    Implementations must be callable from any thread; marshalling onto the
    UI thread is their job.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the host desktop provides a system tray"""
        pass

    @abstractmethod
    def show(self) -> None:
        """Register the icon with the tray

        Raises:
            TraySetupError: the platform rejected the icon
        """
        pass

    @abstractmethod
    def hide(self) -> None:
        """Remove the icon from the tray"""
        pass

    @abstractmethod
    def set_icon(self, icon_path: Path) -> None:
        """Replace the visible icon image

        Args:
            icon_path: PNG file to display
        """
        pass

    @abstractmethod
    def set_tooltip(self, tooltip: str) -> None:
        pass

    @abstractmethod
    def show_message(self, title: str, message: str) -> bool:
        """Show a transient popup

        Returns:
            True if the platform accepted the message
        """
        pass

    @abstractmethod
    def set_click_callback(self, callback: Optional[ClickCallback]) -> None:
        """Route classified pointer clicks to ``callback``"""
        pass
