#!/usr/bin/env python3
"""
beframes CLI entry point.

Usage:
    python -m src.beframes compile --settings job.json
    python -m src.beframes submit --settings job.json --scheduler-url http://manager:8080/api/v3/
"""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
