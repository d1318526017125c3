"""
Response assembly.

Content-Length is always computed from the final body; callers never
supply it.
"""
import socket
import logging
from dataclasses import dataclass
from typing import Optional

from .errors import HttpServerError

logger = logging.getLogger(__name__)

HTTP_VERSION = "HTTP/1.1"

STATUS_OK = "200 OK"
STATUS_CREATED = "201 Created"
STATUS_BAD_REQUEST = "400 Bad Request"
STATUS_NOT_FOUND = "404 Not Found"
STATUS_METHOD_NOT_ALLOWED = "405 Method Not Allowed"
STATUS_INTERNAL_ERROR = "500 Internal Server Error"

TEXT_PLAIN = "text/plain"
OCTET_STREAM = "application/octet-stream"


@dataclass
class Response:
    """One response per request."""
    status: str
    content_type: str
    body: Optional[bytes] = None
    content_encoding: Optional[str] = None

    @property
    def content_length(self) -> int:
        return len(self.body) if self.body else 0

    def to_bytes(self) -> bytes:
        head = f"{HTTP_VERSION} {self.status}\r\n"
        head += f"Content-Type: {self.content_type}\r\n"
        if self.content_encoding:
            head += f"Content-Encoding: {self.content_encoding}\r\n"
        head += f"Content-Length: {self.content_length}\r\n"
        head += "\r\n"
        return head.encode("iso-8859-1") + (self.body or b"")


def text_response(body: bytes, status: str = STATUS_OK, content_encoding: Optional[str] = None) -> Response:
    return Response(status, TEXT_PLAIN, body, content_encoding)


def octet_response(body: Optional[bytes], status: str = STATUS_OK) -> Response:
    return Response(status, OCTET_STREAM, body)


def empty_response(status: str, content_type: str = TEXT_PLAIN) -> Response:
    return Response(status, content_type)


def error_response(error: Exception) -> Response:
    """Map a rejected request to a short text/plain 4xx/5xx response."""
    if isinstance(error, HttpServerError):
        return text_response(f"{error}\n".encode("utf-8", errors="replace"), status=error.status)
    return text_response(b"Internal Server Error\n", status=STATUS_INTERNAL_ERROR)


def write_response(conn: socket.socket, response: Response) -> None:
    """Send the whole response with a single sendall."""
    payload = response.to_bytes()
    conn.sendall(payload)
    logger.debug(f"Sent {len(payload)} bytes ({response.status}, body={response.content_length})")
