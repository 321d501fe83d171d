"""HTTP listener

Threaded stdlib HTTP server: every connection is served on its own worker
thread, the accept loop runs in a background daemon thread. Every method on
every path is forwarded to a ``(path, body) -> status`` callable.
"""

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable, Optional
from urllib.parse import unquote, urlsplit

from loguru import logger

from ..utils import BindError
from ..utils.constants import HttpStatus

RequestCallback = Callable[[str, bytes], int]


class _NotificationServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address, request_callback: RequestCallback):
        self.request_callback = request_callback
        self._in_flight = 0
        self._idle = threading.Condition()
        super().__init__(address, _NotificationRequestHandler)

    def process_request(self, request, client_address):
        # counted before the worker thread starts
        with self._idle:
            self._in_flight += 1
        try:
            super().process_request(request, client_address)
        except Exception:
            self._request_done()
            raise

    def process_request_thread(self, request, client_address):
        try:
            super().process_request_thread(request, client_address)
        finally:
            self._request_done()

    def _request_done(self) -> None:
        with self._idle:
            self._in_flight -= 1
            self._idle.notify_all()

    @property
    def in_flight(self) -> int:
        with self._idle:
            return self._in_flight

    def wait_idle(self, timeout: float) -> bool:
        """Wait until no request is being served

        Returns:
            True if idle before the timeout
        """
        deadline = time.monotonic() + timeout
        with self._idle:
            while self._in_flight > 0:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False
                self._idle.wait(remaining)
            return True


class _NotificationRequestHandler(BaseHTTPRequestHandler):
    server_version = "TrayNotifier"
    protocol_version = "HTTP/1.1"

    def _dispatch(self) -> None:
        path = unquote(urlsplit(self.path).path)
        try:
            body = self._read_body()
            status = self.server.request_callback(path, body)
        except Exception as e:
            logger.exception(f"Request {self.command} {path} failed: {e}")
            status = HttpStatus.INTERNAL_ERROR

        # one request per connection so stop() only waits for real work
        self.close_connection = True
        self.send_response(status)
        self.send_header("Content-Length", "0")
        self.send_header("Connection", "close")
        self.end_headers()

    do_GET = _dispatch
    do_POST = _dispatch
    do_PUT = _dispatch
    do_DELETE = _dispatch
    do_PATCH = _dispatch
    do_HEAD = _dispatch
    do_OPTIONS = _dispatch

    def _read_body(self) -> bytes:
        if "chunked" in self.headers.get("Transfer-Encoding", "").lower():
            return self._read_chunked()

        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length > 0 else b""

    def _read_chunked(self) -> bytes:
        chunks = []
        while True:
            size_line = self.rfile.readline()
            size = int(size_line.split(b";", 1)[0].strip() or b"0", 16)
            if size == 0:
                # trailers, up to the terminating empty line
                while self.rfile.readline() not in (b"\r\n", b"\n", b""):
                    pass
                return b"".join(chunks)
            chunks.append(self.rfile.read(size))
            self.rfile.readline()

    def log_message(self, format, *args):
        logger.debug(f"{self.address_string()} - {format % args}")


class HttpListener:
    """Binds, serves and gracefully shuts down the notification endpoint"""

    def __init__(self, host: str, port: int, request_callback: RequestCallback):
        self._host = host
        self._port = port
        self._request_callback = request_callback
        self._server: Optional[_NotificationServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def is_serving(self) -> bool:
        return self._server is not None

    @property
    def server_address(self):
        """Actual (host, port) once bound"""
        return self._server.server_address if self._server else None

    @property
    def in_flight(self) -> int:
        return self._server.in_flight if self._server else 0

    def start(self) -> None:
        """Bind and start serving in a background thread

        Raises:
            BindError: the address cannot be bound
        """
        if self._server is not None:
            return

        try:
            server = _NotificationServer((self._host, self._port), self._request_callback)
        except (OSError, OverflowError) as e:
            raise BindError(
                f"Cannot listen on {self._host or '*'}:{self._port}: {e}",
                host=self._host,
                port=self._port,
                original_exception=e,
            ) from e

        self._server = server
        self._thread = threading.Thread(
            target=server.serve_forever,
            kwargs={"poll_interval": 0.1},
            name="traynotifier-http",
            daemon=True,
        )
        self._thread.start()
        logger.info(f"HTTP listener serving on {self._host or '*'}:{self._port}")

    def stop(self, grace_period: float) -> None:
        """Stop accepting connections and wait for in-flight requests

        Args:
            grace_period: maximum seconds to wait for running requests
        """
        server = self._server
        if server is None:
            return

        server.shutdown()
        if not server.wait_idle(grace_period):
            logger.warning(
                f"{server.in_flight} request(s) still running after {grace_period}s, closing anyway"
            )
        server.server_close()
        if self._thread is not None:
            self._thread.join(timeout=grace_period)

        self._server = None
        self._thread = None
        logger.info(f"HTTP listener on port {self._port} stopped")
