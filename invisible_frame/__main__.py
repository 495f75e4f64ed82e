"""Entry point for ``python -m invisible_frame``."""

import sys

from src.cli import main

if __name__ == "__main__":
    sys.exit(main())
