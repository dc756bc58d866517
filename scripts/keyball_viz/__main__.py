"""CLI entry point for keyball_viz package.

Usage:
    python -m keyball_viz draw keymap.c -o keymap.svg
    python -m keyball_viz stats keymap.c
"""

from .cli import main

if __name__ == "__main__":
    main()
