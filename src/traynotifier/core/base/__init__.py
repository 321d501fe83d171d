"""Lifecycle base classes"""

from .lifecycle_component import LifecycleComponent

__all__ = ["LifecycleComponent"]
