"""Result objects produced by a single check request."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import IssueCategory
from .language_issue import LanguageIssue


@dataclass(frozen=True)
class IssueRecord:
    """One row of the issue list shown next to the before/after views."""

    category: IssueCategory
    original_span: str
    suggested_replacement: str | None
    message: str
    offset: int
    length: int
    rendered: bool = True


@dataclass(frozen=True)
class CheckSession:
    """Everything derived from one submitted text.

    A new session is built for every check request; the owner replaces the
    previous one wholesale instead of updating it.
    """

    original_text: str
    corrected_text: str
    annotated_original: str
    annotated_corrected: str
    issues: tuple[LanguageIssue, ...] = field(default_factory=tuple)
    issue_records: tuple[IssueRecord, ...] = field(default_factory=tuple)

    @property
    def has_issues(self) -> bool:
        return bool(self.issue_records)
