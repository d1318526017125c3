"""
Request parsing from a single socket read.

The buffer is split at the first blank line: everything before it is the
header block, everything after it is the body (possibly empty, possibly
truncated when the body did not fit in one read).
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import MalformedRequest, MalformedRequestLine, MalformedHeader

logger = logging.getLogger(__name__)

HEADER_TERMINATOR = b"\r\n\r\n"
LINE_BREAK = "\r\n"
HEADER_SEPARATOR = ": "

# Lossless for any byte sequence, so echoed values round-trip byte for byte
HEADER_ENCODING = "iso-8859-1"


@dataclass
class ParsedRequest:
    """A request as read from one connection."""
    method: str
    path: str
    version: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def get_header(self, name: str) -> Optional[str]:
        """Case-sensitive header lookup."""
        return self.headers.get(name)

    @property
    def segments(self) -> List[str]:
        """Path split on "/"; the leading segment is always empty."""
        return self.path.split("/")


def parse_request_line(line: str):
    """
    Split `METHOD SP path SP version` into its three tokens.

    Raises:
        MalformedRequestLine: on any token count other than three, or a
            path that does not start with "/"
    """
    parts = line.split(" ")
    if len(parts) != 3:
        raise MalformedRequestLine(f"Invalid request line: {line!r}")

    method, path, version = parts
    if not path.startswith("/"):
        raise MalformedRequestLine(f"Request target must start with '/': {path!r}")

    return method, path, version


def parse_headers(lines: List[str]) -> Dict[str, str]:
    """
    Build the header map. Names keep their case; a repeated name keeps only
    its last value.
    """
    headers: Dict[str, str] = {}
    for line in lines:
        parts = line.split(HEADER_SEPARATOR, 1)
        if len(parts) != 2:
            raise MalformedHeader(f"Invalid header line: {line!r}")
        name, value = parts
        headers[name] = value
    return headers


def parse_request(buffer: bytes, length: Optional[int] = None) -> ParsedRequest:
    """
    Parse the first `length` bytes of `buffer` into a ParsedRequest.

    Args:
        buffer: Bytes read from the socket
        length: Number of valid bytes in buffer (defaults to all of it)

    Returns:
        ParsedRequest

    Raises:
        MalformedRequest: empty input or no blank line after the headers
        MalformedRequestLine: bad request line
        MalformedHeader: header line without ": "
    """
    data = bytes(buffer[:length] if length is not None else buffer)
    if not data:
        raise MalformedRequest("Empty request")

    head, sep, body = data.partition(HEADER_TERMINATOR)
    if not sep:
        raise MalformedRequest("Header block is not terminated by a blank line")

    lines = head.decode(HEADER_ENCODING).split(LINE_BREAK)
    method, path, version = parse_request_line(lines[0])
    headers = parse_headers(lines[1:])

    logger.debug(f"Parsed {method} {path} with {len(headers)} headers, {len(body)} body bytes")
    return ParsedRequest(method=method, path=path, version=version, headers=headers, body=body)
