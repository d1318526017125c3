"""
Per-request error kinds.

Every error carries the status phrase the connection boundary answers with,
so a bad request closes only its own connection.
"""


class HttpServerError(Exception):
    """Base class for errors that reject a single request."""

    status = "400 Bad Request"


class MalformedRequest(HttpServerError):
    """The raw buffer could not be parsed into a request."""


class MalformedRequestLine(MalformedRequest):
    """Request line is not `METHOD SP path SP version`."""


class MalformedHeader(MalformedRequest):
    """A header line has no `": "` separator."""


class MalformedRoutePath(MalformedRequest):
    """The path does not have the shape its route requires."""


class UnsupportedMethod(HttpServerError):
    status = "405 Method Not Allowed"

    def __init__(self, method: str):
        super().__init__(f"Unsupported method: {method}")
        self.method = method


class FileNotFound(HttpServerError):
    """GET on a file that could not be read. Answered as a plain 404."""

    status = "404 Not Found"

    def __init__(self, path: str, reason: str = ""):
        super().__init__(f"File not readable: {path} {reason}".rstrip())
        self.path = path
