"""Lifecycle state definitions"""

from enum import Enum


class ComponentState(Enum):
    """Component lifecycle states"""

    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    ERROR = "error"
