"""
Routing table from (method, first path segment) to a route decision.

Segments are used literally: no percent-decoding.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

from .errors import MalformedRoutePath, UnsupportedMethod
from .request import ParsedRequest

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST")


@dataclass(frozen=True)
class Echo:
    payload: str


@dataclass(frozen=True)
class UserAgent:
    pass


@dataclass(frozen=True)
class FileGet:
    filename: str


@dataclass(frozen=True)
class FilePost:
    filename: str
    content: bytes


@dataclass(frozen=True)
class Exists:
    path: str


@dataclass(frozen=True)
class NotFound:
    pass


RouteDecision = Union[Echo, UserAgent, FileGet, FilePost, Exists, NotFound]
RouteBuilder = Callable[[ParsedRequest, List[str]], RouteDecision]


def _filename_segment(segments: List[str]) -> str:
    if len(segments) < 3:
        raise MalformedRoutePath(f"Missing filename in {'/'.join(segments)!r}")
    return segments[2]


def build_file_post(request: ParsedRequest, segments: List[str]) -> RouteDecision:
    return FilePost(_filename_segment(segments), request.body)


def build_user_agent(request: ParsedRequest, segments: List[str]) -> RouteDecision:
    return UserAgent()


def build_echo(request: ParsedRequest, segments: List[str]) -> RouteDecision:
    # ["", "echo", payload]
    if len(segments) != 3:
        raise MalformedRoutePath(f"Echo expects exactly one value segment: {request.path!r}")
    return Echo(segments[2])


def build_file_get(request: ParsedRequest, segments: List[str]) -> RouteDecision:
    return FileGet(_filename_segment(segments))


class Router:
    """
    Table of (method, first segment) -> builder.

    A GET that matches no entry becomes an Exists check on the literal path;
    a POST that matches no entry becomes NotFound.
    """

    def __init__(self):
        self._routes: Dict[Tuple[str, str], RouteBuilder] = {}

    def add(self, method: str, segment: str, builder: RouteBuilder) -> None:
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Cannot route method {method}")
        self._routes[(method, segment)] = builder

    def lookup(self, method: str, segment: str) -> Optional[RouteBuilder]:
        return self._routes.get((method, segment))

    def route(self, request: ParsedRequest) -> RouteDecision:
        """
        Produce exactly one decision for the request.

        Raises:
            UnsupportedMethod: method is not GET or POST
            MalformedRoutePath: the matched route rejects the path shape
        """
        if request.method not in SUPPORTED_METHODS:
            raise UnsupportedMethod(request.method)

        segments = request.segments
        first = segments[1] if len(segments) > 1 else ""
        builder = self.lookup(request.method, first)
        if builder is not None:
            decision = builder(request, segments)
        elif request.method == "GET":
            decision = Exists(request.path)
        else:
            decision = NotFound()

        logger.debug(f"{request.method} {request.path} -> {type(decision).__name__}")
        return decision


def default_router() -> Router:
    router = Router()
    router.add("POST", "files", build_file_post)
    router.add("GET", "user-agent", build_user_agent)
    router.add("GET", "echo", build_echo)
    router.add("GET", "files", build_file_get)
    return router
