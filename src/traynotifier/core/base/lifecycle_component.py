"""Lifecycle management base class

Start/stop semantics shared by stateful components:
- STOPPED -> STARTING -> RUNNING -> STOPPING -> STOPPED
- stop() on a stopped component is a no-op
- start() on a running component restarts it
- transitions are serialized by a per-component lock
"""

import threading
from abc import ABC, abstractmethod

from ..interfaces.lifecycle import ComponentState
from ...utils import app_logger


class LifecycleComponent(ABC):
    """Base class for lifecycle-managed components

    Usage:
        class MyComponent(LifecycleComponent):
            def __init__(self):
                super().__init__("MyComponent")
                self._resource = None

            def _do_start(self) -> None:
                self._resource = acquire_resource()

            def _do_stop(self) -> None:
                release_resource(self._resource)

        component = MyComponent()
        component.start()
        # ... use component ...
        component.stop()

    Errors raised by ``_do_start`` propagate to the caller after the
    component has been put back into STOPPED; ``_do_start`` is expected to
    undo its own partial work.
    """

    def __init__(self, component_name: str):
        """
        Args:
            component_name: Name for logging and identification
        """
        self._component_name = component_name
        self._state = ComponentState.STOPPED
        self._lifecycle_lock = threading.RLock()

    def start(self) -> None:
        """Start the component, restarting it if already running"""
        with self._lifecycle_lock:
            if self._state == ComponentState.RUNNING:
                app_logger.log_lifecycle_event(
                    f"{self._component_name} restarting", {"component": self._component_name}
                )
                self.stop()

            self._state = ComponentState.STARTING
            app_logger.log_lifecycle_event(
                f"{self._component_name} starting", {"component": self._component_name}
            )

            try:
                self._do_start()
            except Exception as e:
                self._state = ComponentState.STOPPED
                app_logger.log_error(e, f"{self._component_name}_start")
                raise

            self._state = ComponentState.RUNNING
            app_logger.log_lifecycle_event(
                f"{self._component_name} started", {"component": self._component_name}
            )

    def stop(self) -> None:
        """Stop the component; a no-op when already stopped"""
        with self._lifecycle_lock:
            if self._state == ComponentState.STOPPED:
                return

            self._state = ComponentState.STOPPING
            app_logger.log_lifecycle_event(
                f"{self._component_name} stopping", {"component": self._component_name}
            )

            try:
                self._do_stop()
            except Exception as e:
                self._state = ComponentState.ERROR
                app_logger.log_error(e, f"{self._component_name}_stop")
                raise

            self._state = ComponentState.STOPPED
            app_logger.log_lifecycle_event(
                f"{self._component_name} stopped", {"component": self._component_name}
            )

    @abstractmethod
    def _do_start(self) -> None:
        """Subclass-specific start logic"""
        pass

    @abstractmethod
    def _do_stop(self) -> None:
        """Subclass-specific stop logic"""
        pass

    @property
    def is_running(self) -> bool:
        return self._state == ComponentState.RUNNING

    @property
    def state(self) -> ComponentState:
        return self._state

    @property
    def component_name(self) -> str:
        return self._component_name
