"""
Entry point for running tablequill as a module.

Usage:
    python -m tablequill render input.html -o output.pdf
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
