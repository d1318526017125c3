"""
File store for the /files routes.

Filenames are appended verbatim to the configured base directory. Reads and
writes are not synchronized: concurrent writers to the same name may
interleave.
"""
import os
import logging

from .errors import FileNotFound, MalformedRoutePath
from .request import HEADER_ENCODING

logger = logging.getLogger(__name__)

UNSAFE_NAMES = ("", ".", "..")
UNSAFE_CHARS = ("/", "\\")


def to_fs_path(prefix: str, name: str) -> bytes:
    """
    Join a configured prefix and a request-derived name into an OS path.

    The prefix is an OS string; the name was decoded from the wire as
    ISO-8859-1, so encoding it back yields the client's raw bytes.
    """
    return os.fsencode(prefix) + name.encode(HEADER_ENCODING)


class FileStore:
    """
    Reads and writes files named by a single path segment.

    Args:
        base_directory: Prefix for every filename, used as given
        sanitize: Reject empty, dot and separator-bearing names
    """

    def __init__(self, base_directory: str, sanitize: bool = False):
        self.base_directory = base_directory
        self.sanitize = sanitize

    def _check_name(self, filename: str) -> None:
        if not self.sanitize:
            return
        if filename in UNSAFE_NAMES or any(ch in filename for ch in UNSAFE_CHARS):
            raise MalformedRoutePath(f"Unsafe filename: {filename!r}")

    def path_for(self, filename: str) -> bytes:
        self._check_name(filename)
        return to_fs_path(self.base_directory, filename)

    def read(self, filename: str) -> bytes:
        """
        Return the file's bytes.

        Raises:
            FileNotFound: the read failed for any reason
        """
        path = self.path_for(filename)
        try:
            with open(path, "rb") as f:
                return f.read()
        except (OSError, ValueError) as e:
            # ValueError: embedded NUL byte in the name
            logger.warning(f"Cannot read {path!r}: {e}")
            raise FileNotFound(os.fsdecode(path), str(e)) from e

    def write(self, filename: str, content: bytes) -> bool:
        """
        Create or truncate the file and write content to it.

        Returns:
            True on success, False when the write failed (the failure is
            logged, never raised)
        """
        path = self.path_for(filename)
        try:
            with open(path, "wb") as f:
                f.write(content)
        except (OSError, ValueError) as e:
            logger.warning(f"Write to {path!r} failed: {e}")
            return False
        logger.info(f"Wrote {len(content)} bytes to {path!r}")
        return True


def exists(path: str, root: str = ".") -> bool:
    """
    Existence check for the generic GET route.

    Only "no such file" counts as missing; any other stat failure (for
    example a permission error or a NUL byte in the path) counts as present.
    """
    fs_path = to_fs_path(root, path)
    try:
        os.stat(fs_path)
    except FileNotFoundError:
        return False
    except (OSError, ValueError) as e:
        logger.debug(f"stat {fs_path!r} failed with {e}, treating as present")
    return True
