"""Command-line entrypoint for the text corrector."""

from __future__ import annotations

from src.corrector.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
