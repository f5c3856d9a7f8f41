"""
Entry point for running pagezones as a module.

Usage:
    python -m pagezones validate page.html
    pagezones export page.html --output zones.json
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
