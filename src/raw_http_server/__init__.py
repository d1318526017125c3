"""Minimal HTTP/1.1 server over raw TCP sockets."""

__version__ = "0.1.0"
