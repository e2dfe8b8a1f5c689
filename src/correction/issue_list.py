"""Build the per-issue display records shown beside the before/after views."""

from __future__ import annotations

from typing import Iterable

from src.models import IssueRecord, LanguageIssue

from .normalizer import normalize, resolve_overlaps


def build_issue_records(
    text: str, issues: Iterable[LanguageIssue]
) -> tuple[IssueRecord, ...]:
    """Return one record per in-bounds issue, in ascending offset order.

    Issues skipped by the overlap policy are still listed, with
    ``rendered=False``, so nothing the service reported is hidden.
    """

    ordered = normalize(text, issues)
    kept, _ = resolve_overlaps(ordered)
    kept_ids = {id(issue) for issue in kept}
    return tuple(
        IssueRecord(
            category=issue.category,
            original_span=text[issue.offset : issue.end],
            suggested_replacement=issue.first_replacement,
            message=issue.message,
            offset=issue.offset,
            length=issue.length,
            rendered=id(issue) in kept_ids,
        )
        for issue in ordered
    )
