"""Text corrector package."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "corrector",
    "correction",
    "language_check",
    "models",
]
