"""
Pytest configuration for raw-http-server tests.

Puts the src directory on the Python path and provides a live server
running on an ephemeral port for integration tests.
"""
import os
import sys
import socket
from pathlib import Path

import pytest

# Add src directory to Python path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from raw_http_server.core.file_store import FileStore  # noqa: E402
from raw_http_server.handlers import RequestHandler  # noqa: E402
from raw_http_server.server import HttpServer, start_in_thread  # noqa: E402


@pytest.fixture
def files_dir(tmp_path):
    """Base directory string with a trailing separator, as the CLI expects."""
    directory = tmp_path / "files"
    directory.mkdir()
    return str(directory) + os.sep


@pytest.fixture
def file_store(files_dir):
    return FileStore(files_dir)


@pytest.fixture
def request_handler(file_store, tmp_path):
    return RequestHandler(file_store, exists_root=str(tmp_path))


@pytest.fixture
def live_server(request_handler):
    """Server on 127.0.0.1 with an OS-assigned port, stopped after the test."""
    server = HttpServer("127.0.0.1", 0, request_handler, read_buffer_size=1024, timeout=5.0)
    thread = start_in_thread(server)
    yield server
    server.shutdown()
    thread.join(timeout=5)


@pytest.fixture
def base_url(live_server):
    host, port = live_server.server_address
    return f"http://{host}:{port}"


def send_raw(address, payload: bytes, timeout: float = 5.0) -> bytes:
    """Send payload on a fresh connection and read until the server closes it."""
    with socket.create_connection(address, timeout=timeout) as sock:
        sock.sendall(payload)
        chunks = []
        while True:
            chunk = sock.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


def split_response(raw: bytes):
    """Return (status_line, headers, body) from raw response bytes."""
    head, _, body = raw.partition(b"\r\n\r\n")
    lines = head.decode("iso-8859-1").split("\r\n")
    headers = dict(line.split(": ", 1) for line in lines[1:])
    return lines[0], headers, body


@pytest.fixture
def raw_client(live_server):
    def _send(payload: bytes):
        return split_response(send_raw(live_server.server_address, payload))
    return _send
