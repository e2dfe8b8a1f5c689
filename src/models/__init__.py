"""Public model exports for the project.

Keep the :mod:`src` namespace clean: tests and other modules should import
``from src.models import LanguageIssue, IssueCategory``.
"""

from __future__ import annotations

from .check_session import CheckSession, IssueRecord
from .enums import IssueCategory
from .language_issue import LanguageIssue

__all__ = ["LanguageIssue", "IssueCategory", "IssueRecord", "CheckSession"]
