"""
Main entry point for ThinkControl package

This allows running the package with: python -m thinkcontrol
"""

import sys

from .cli.main import main

if __name__ == "__main__":
    sys.exit(main())
