"""Icon asset lookup

Maps an icon name (usually an HTTP request path) onto a PNG bundled under
``traynotifier/resources/icons``.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..utils.constants import Paths

ICON_ROOT = Path(__file__).resolve().parent.parent / Paths.ICON_DIR


@dataclass(frozen=True)
class IconImage:
    """Ready-to-display icon handle"""

    name: str
    path: Path


class AssetResolver:
    """Resolves icon names to images; stateless and thread safe"""

    def __init__(self, root: Optional[Path] = None):
        self._root = (root or ICON_ROOT).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, name: Optional[str]) -> Optional[IconImage]:
        """Find the image for ``name``

        Leading slashes are stripped and ``.png`` is appended.

        Returns:
            The image, or None when the name is empty, escapes the icon
            root, or no file with exactly that name exists
        """
        if not name:
            return None

        stripped = name.lstrip("/")
        if not stripped:
            return None

        key = stripped + Paths.ICON_SUFFIX
        try:
            candidate = (self._root / key).resolve()
            if not candidate.is_relative_to(self._root) or not candidate.is_file():
                return None
            if not self._matches_exactly(candidate, key):
                return None
        except (OSError, ValueError):
            # e.g. embedded NUL bytes in the request path
            return None

        return IconImage(name=stripped, path=candidate)

    def _matches_exactly(self, candidate: Path, key: str) -> bool:
        """Case-sensitive match, also on case-insensitive file systems"""
        relative = candidate.relative_to(self._root)
        # resolve() may return the on-disk spelling (Windows)
        if relative.as_posix() != key:
            return False
        parent = self._root
        for part in relative.parts:
            if part not in os.listdir(parent):
                return False
            parent = parent / part
        return True

    def exists(self, name: Optional[str]) -> bool:
        return self.resolve(name) is not None
