"""
Shared configuration for the server loop, the CLI and the request core.
"""
import os
import logging
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    """Centralized configuration loaded from environment variables."""

    # Listener
    HOST = os.getenv("HTTP_HOST", "0.0.0.0")
    PORT = int(os.getenv("HTTP_PORT", "4221"))

    # File routes (used verbatim as a filename prefix)
    FILES_DIRECTORY = os.getenv("FILES_DIRECTORY", "/tmp/")

    # Generic existence check prefix for GET on unknown paths
    EXISTS_ROOT = os.getenv("EXISTS_ROOT", ".")

    # Connection I/O
    READ_BUFFER_SIZE = int(os.getenv("READ_BUFFER_SIZE", "1024"))
    SOCKET_TIMEOUT = float(os.getenv("SOCKET_TIMEOUT", "10"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Hardening options, both off by default
    SANITIZE_FILENAMES = _env_flag("SANITIZE_FILENAMES")
    REPORT_WRITE_ERRORS = _env_flag("REPORT_WRITE_ERRORS")

    @classmethod
    def get_socket_timeout(cls) -> Optional[float]:
        """Per-connection deadline in seconds, or None when disabled (0)."""
        return cls.SOCKET_TIMEOUT if cls.SOCKET_TIMEOUT > 0 else None


def setup_logging(level: Optional[str] = None):
    """Configure logging based on LOG_LEVEL."""
    level = level or Config.LOG_LEVEL
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    return logging.getLogger(__name__)
