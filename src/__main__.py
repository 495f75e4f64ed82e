#!/usr/bin/env python3
"""
__main__.py - Module entry point for python -m execution

This allows the package to be run directly as:
    python -m src <command> [args]

The installed wrapper offers the same through:
    python -m invisible_frame <command> [args]
"""

import sys

from .cli import main

if __name__ == '__main__':
    sys.exit(main())
