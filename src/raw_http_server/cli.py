#!/usr/bin/env python3
"""
raw-http-server CLI

Usage:
    python -m raw_http_server.cli serve --directory /tmp/files/
    python -m raw_http_server.cli check-port --port 4221
"""

import argparse
import errno
import socket
import sys

from .core.config import Config, setup_logging
from .core.file_store import FileStore
from .handlers import RequestHandler
from .server import HttpServer


def cmd_serve(args) -> int:
    """Serve until interrupted."""
    logger = setup_logging(args.log_level)

    store = FileStore(args.directory, sanitize=args.sanitize_filenames)
    handler = RequestHandler(
        store,
        exists_root=Config.EXISTS_ROOT,
        report_write_errors=args.report_write_errors,
    )

    try:
        server = HttpServer(args.host, args.port, handler)
    except OSError as e:
        logger.error(f"Failed to bind to port {args.port}: {e}")
        return 1

    logger.info(f"Serving files from {args.directory!r}")
    print("Press Ctrl+C to stop")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down...")
        server.shutdown()
    return 0


def cmd_check_port(args) -> int:
    """Exit 0 when host:port can be bound, 1 otherwise."""
    print(f"Checking if port {args.port} is available on {args.host}...")

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((args.host, args.port))
    except OSError as e:
        if e.errno == errno.EADDRINUSE:
            print(f"[ERROR] Port {args.port} is already in use!")
            print("Stop the existing process or change HTTP_PORT in your .env file.")
        else:
            print(f"Error checking port {args.port}: {e}")
        return 1
    finally:
        sock.close()

    print(f"Port {args.port} is available.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Minimal HTTP/1.1 server over raw sockets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m raw_http_server.cli serve --directory /tmp/files/
  python -m raw_http_server.cli check-port --port 4221
        """
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="serve",
        choices=["serve", "check-port"],
        help="Command to run (default: serve)"
    )
    parser.add_argument("--directory", default=Config.FILES_DIRECTORY,
                        help="Base directory for /files/<name>, used verbatim as a prefix")
    parser.add_argument("--host", default=Config.HOST)
    parser.add_argument("--port", type=int, default=Config.PORT)
    parser.add_argument("--log-level", default=Config.LOG_LEVEL)
    parser.add_argument("--sanitize-filenames", action="store_true", default=Config.SANITIZE_FILENAMES,
                        help="Reject file names such as '..' or names containing path separators")
    parser.add_argument("--report-write-errors", action="store_true", default=Config.REPORT_WRITE_ERRORS,
                        help="Answer 500 instead of 201 when a POST /files write fails")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "check-port":
        return cmd_check_port(args)
    return cmd_serve(args)


if __name__ == "__main__":
    sys.exit(main())
