# Core request/response modules shared by the server loop and the CLI
from .config import Config, setup_logging
from .errors import (
    HttpServerError,
    MalformedRequest,
    MalformedRequestLine,
    MalformedHeader,
    MalformedRoutePath,
    UnsupportedMethod,
    FileNotFound,
)
from .request import ParsedRequest, parse_request
from .response import Response, write_response, error_response
from .compression import accepts_gzip, negotiate
from .file_store import FileStore, exists
from .router import (
    Router,
    default_router,
    Echo,
    UserAgent,
    FileGet,
    FilePost,
    Exists,
    NotFound,
)

__all__ = [
    # Config
    "Config",
    "setup_logging",
    # Errors
    "HttpServerError",
    "MalformedRequest",
    "MalformedRequestLine",
    "MalformedHeader",
    "MalformedRoutePath",
    "UnsupportedMethod",
    "FileNotFound",
    # Request / response
    "ParsedRequest",
    "parse_request",
    "Response",
    "write_response",
    "error_response",
    # Compression
    "accepts_gzip",
    "negotiate",
    # File store
    "FileStore",
    "exists",
    # Routing
    "Router",
    "default_router",
    "Echo",
    "UserAgent",
    "FileGet",
    "FilePost",
    "Exists",
    "NotFound",
]
