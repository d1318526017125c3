"""
Raw socket HTTP server.

One accept loop; every accepted connection is served on its own thread:
read one buffer, parse, route, write one response, close. A bad request
closes only its own connection.
"""
import socket
import logging
import threading
from typing import Optional, Tuple

from .core.config import Config
from .core.errors import HttpServerError
from .core.request import parse_request
from .core.response import Response, write_response, error_response
from .handlers import RequestHandler

logger = logging.getLogger(__name__)

MAX_BACKLOG = 128
ACCEPT_POLL_INTERVAL = 0.5
USE_CONFIG_TIMEOUT = object()


class HttpServer:
    """
    Threaded raw-socket HTTP/1.1 server.

    Args:
        host: Interface to bind
        port: Port to bind (0 picks a free port)
        handler: RequestHandler that turns requests into responses
        read_buffer_size: Bytes read from each connection in a single recv
            (default: Config.READ_BUFFER_SIZE)
        timeout: Per-connection read/write deadline in seconds, None for no
            deadline (default: Config.SOCKET_TIMEOUT at construction time)
    """

    def __init__(
        self,
        host: str,
        port: int,
        handler: RequestHandler,
        read_buffer_size: Optional[int] = None,
        timeout=USE_CONFIG_TIMEOUT,
    ):
        self.handler = handler
        self.read_buffer_size = read_buffer_size or Config.READ_BUFFER_SIZE
        # None is a valid timeout (no deadline), so the default is a sentinel
        self.timeout = Config.get_socket_timeout() if timeout is USE_CONFIG_TIMEOUT else timeout
        self._shutdown = threading.Event()
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            self._socket.bind((host, port))
            self._socket.listen(MAX_BACKLOG)
        except OSError:
            self._socket.close()
            raise
        self._socket.settimeout(ACCEPT_POLL_INTERVAL)
        logger.info(f"Listening on {host}:{self.server_address[1]}")

    @property
    def server_address(self) -> Tuple[str, int]:
        return self._socket.getsockname()[:2]

    def serve_forever(self) -> None:
        """Accept connections until shutdown() is called."""
        connection_count = 0
        try:
            while not self._shutdown.is_set():
                try:
                    conn, addr = self._socket.accept()
                except socket.timeout:
                    continue
                except OSError as e:
                    if self._shutdown.is_set():
                        break
                    logger.error(f"Error accepting connection: {e}")
                    self._shutdown.wait(ACCEPT_POLL_INTERVAL)
                    continue

                connection_count += 1
                logger.debug(f"[{connection_count}] Connection from {addr}")
                thread = threading.Thread(target=self.handle_connection, args=(conn, addr))
                thread.daemon = True
                thread.start()
        finally:
            self._socket.close()
            logger.info("Server socket closed")

    def shutdown(self) -> None:
        self._shutdown.set()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.shutdown()
        self._socket.close()

    def build_response(self, data: bytes) -> Response:
        request = parse_request(data)
        logger.info(f"{request.method} {request.path} {request.version}")
        return self.handler.handle(request)

    def handle_connection(self, conn: socket.socket, addr) -> None:
        """Serve exactly one request on conn, then close it."""
        try:
            conn.settimeout(self.timeout)
            data = conn.recv(self.read_buffer_size)
            if not data:
                logger.debug(f"[{addr}] Closed before sending a request")
                return

            try:
                response = self.build_response(data)
            except HttpServerError as e:
                logger.warning(f"[{addr}] Rejected request: {e}")
                response = error_response(e)
            except Exception as e:
                logger.exception(f"[{addr}] Error handling request: {e}")
                response = error_response(e)

            write_response(conn, response)
            logger.info(f"[{addr}] {response.status} ({response.content_length} bytes)")

        except socket.timeout:
            logger.warning(f"[{addr}] Connection timed out")
        except OSError as e:
            logger.warning(f"[{addr}] Connection error: {e}")
        finally:
            conn.close()


def start_in_thread(server: HttpServer) -> threading.Thread:
    """Run serve_forever on a daemon thread and return the thread."""
    thread = threading.Thread(target=server.serve_forever, name="http-accept-loop")
    thread.daemon = True
    thread.start()
    return thread
