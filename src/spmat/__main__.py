"""
CLI entry point for spmat.

Usage:
    python -m spmat <command> [options]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
