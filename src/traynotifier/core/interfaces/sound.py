"""Desktop property provider interface"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

SoundAction = Callable[[], Any]


class IDesktopProperties(ABC):
    """Named platform settings queried at runtime"""

    @abstractmethod
    def get_property(self, name: str) -> Optional[Any]:
        """Look up a desktop property

        Args:
            name: property name, e.g. ``win.sound.asterisk``

        Returns:
            The property value, or None if the platform does not define it
        """
        pass
