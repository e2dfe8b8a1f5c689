"""Enumerations used by the issue models.

The values are the CSS class names used by the results page, so a display
layer can colour issues by category without another lookup.
"""

from __future__ import annotations

from enum import Enum


class IssueCategory(str, Enum):
    """The four categories an issue is shown under."""

    SPELLING = "spelling"
    STYLE = "style"
    GRAMMAR = "grammar"
    CLARITY = "clarity"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]
