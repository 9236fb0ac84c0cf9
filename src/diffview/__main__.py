"""
CLI entry point for diffview.

This allows the tool to be run as:
    python -m diffview HEAD
"""

import sys
from diffview.cli import main

if __name__ == "__main__":
    sys.exit(main())
