#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

    python main.py --dir images --ref images/reference.jpg

Or, once installed:

    recreate --help
"""

from recreate.cli import app

if __name__ == "__main__":
    app()
