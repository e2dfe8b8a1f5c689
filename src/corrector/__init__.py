"""Check sessions, results pages and the command-line front end."""

from __future__ import annotations

from .session import (
    CheckFailedError,
    CheckInProgressError,
    CorrectionController,
    EmptyTextError,
    build_session,
    run_check,
)

__all__ = [
    "CheckFailedError",
    "CheckInProgressError",
    "CorrectionController",
    "EmptyTextError",
    "build_session",
    "run_check",
]
