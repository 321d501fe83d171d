"""Mock objects"""
from .tray_mock import MockTrayBackend

__all__ = [
    'MockTrayBackend',
]
