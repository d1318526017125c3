#!/usr/bin/env python3
"""
Run the server from a checkout.

Usage:
    python run.py --directory /tmp/files/
    python run.py check-port

    # or with venv
    .venv/bin/python run.py --directory /tmp/files/
"""
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))


if __name__ == "__main__":
    from raw_http_server.cli import main

    sys.exit(main())
