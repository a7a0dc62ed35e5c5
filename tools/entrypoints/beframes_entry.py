#!/usr/bin/env python3
"""PyInstaller entrypoint for beframes."""

from src.beframes.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
