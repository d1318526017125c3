"""
Route execution: turns a route decision into a Response.
"""
import logging
from typing import Callable, Dict, Optional

from .core.compression import negotiate
from .core.errors import FileNotFound
from .core.file_store import FileStore, exists
from .core.request import ParsedRequest, HEADER_ENCODING
from .core.response import (
    Response,
    STATUS_OK,
    STATUS_CREATED,
    STATUS_NOT_FOUND,
    STATUS_INTERNAL_ERROR,
    OCTET_STREAM,
    text_response,
    octet_response,
    empty_response,
)
from .core.router import (
    Router,
    RouteDecision,
    default_router,
    Echo,
    UserAgent,
    FileGet,
    FilePost,
    Exists,
    NotFound,
)

logger = logging.getLogger(__name__)


class RequestHandler:
    """
    Routes a parsed request and builds its response.

    Parse and routing errors are not caught here; they propagate to the
    connection boundary.
    """

    def __init__(
        self,
        file_store: FileStore,
        router: Optional[Router] = None,
        exists_root: str = ".",
        report_write_errors: bool = False,
    ):
        self.file_store = file_store
        self.router = router or default_router()
        self.exists_root = exists_root
        self.report_write_errors = report_write_errors
        self._dispatch: Dict[type, Callable[[RouteDecision, ParsedRequest], Response]] = {
            Echo: self.handle_echo,
            UserAgent: self.handle_user_agent,
            FileGet: self.handle_file_get,
            FilePost: self.handle_file_post,
            Exists: self.handle_exists,
            NotFound: self.handle_not_found,
        }

    def handle(self, request: ParsedRequest) -> Response:
        decision = self.router.route(request)
        return self._dispatch[type(decision)](decision, request)

    def handle_echo(self, decision: Echo, request: ParsedRequest) -> Response:
        payload = decision.payload.encode(HEADER_ENCODING)
        body, encoding = negotiate(payload, request.get_header("Accept-Encoding"))
        return text_response(body, content_encoding=encoding)

    def handle_user_agent(self, decision: UserAgent, request: ParsedRequest) -> Response:
        user_agent = request.get_header("User-Agent") or ""
        return text_response(user_agent.encode(HEADER_ENCODING))

    def handle_file_get(self, decision: FileGet, request: ParsedRequest) -> Response:
        try:
            data = self.file_store.read(decision.filename)
        except FileNotFound:
            return empty_response(STATUS_NOT_FOUND, OCTET_STREAM)
        return octet_response(data)

    def handle_file_post(self, decision: FilePost, request: ParsedRequest) -> Response:
        written = self.file_store.write(decision.filename, decision.content)
        if not written and self.report_write_errors:
            return empty_response(STATUS_INTERNAL_ERROR)
        # Write failures are reported as 201 unless report_write_errors is set
        return empty_response(STATUS_CREATED)

    def handle_exists(self, decision: Exists, request: ParsedRequest) -> Response:
        if exists(decision.path, self.exists_root):
            return empty_response(STATUS_OK)
        return empty_response(STATUS_NOT_FOUND)

    def handle_not_found(self, decision: NotFound, request: ParsedRequest) -> Response:
        return empty_response(STATUS_NOT_FOUND)
