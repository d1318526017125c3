"""
Gzip negotiation for the echo route.

This is a substring check on Accept-Encoding, not q-value negotiation.
"""
import gzip
from typing import Optional, Tuple

GZIP = "gzip"


def accepts_gzip(accept_encoding: Optional[str]) -> bool:
    """True when the raw header value mentions gzip anywhere."""
    return bool(accept_encoding) and GZIP in accept_encoding


def compress(payload: bytes) -> bytes:
    """Gzip stream at default settings."""
    return gzip.compress(payload)


def negotiate(payload: bytes, accept_encoding: Optional[str]) -> Tuple[bytes, Optional[str]]:
    """
    Pick the response body and Content-Encoding for an echoed payload.

    Returns:
        Tuple of (body, content_encoding). content_encoding is None when the
        payload passes through unmodified.
    """
    if accepts_gzip(accept_encoding):
        return compress(payload), GZIP
    return payload, None
