"""HTTP listener for notification requests"""

from .http_listener import HttpListener, RequestCallback

__all__ = ["HttpListener", "RequestCallback"]
