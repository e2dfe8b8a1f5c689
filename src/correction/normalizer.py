"""Validation, ordering and overlap resolution for issue sets.

Two orderings are used by the renderers and they are deliberately kept as
separate functions:

- :func:`ascending_order` for left-to-right passes (highlighting, the issue
  list). Ties on ``offset`` put the longer span first.
- :func:`descending_order` for right-to-left splicing, where edits must not
  move the offsets of issues still to be applied.
"""

from __future__ import annotations

import logging
from typing import Iterable

from src.models import LanguageIssue

LOGGER = logging.getLogger(__name__)


def ascending_order(issues: Iterable[LanguageIssue]) -> list[LanguageIssue]:
    """Return ``issues`` by ascending offset, longer spans first on ties."""
    return sorted(issues, key=lambda issue: (issue.offset, -issue.length))


def descending_order(issues: Iterable[LanguageIssue]) -> list[LanguageIssue]:
    """Return ``issues`` by descending offset, longer spans first on ties."""
    return sorted(issues, key=lambda issue: (issue.offset, issue.length), reverse=True)


def is_within_bounds(issue: LanguageIssue, text_length: int) -> bool:
    return issue.offset >= 0 and issue.length > 0 and issue.end <= text_length


def normalize(text: str, issues: Iterable[LanguageIssue]) -> list[LanguageIssue]:
    """Drop issues whose span falls outside ``text`` and order the rest.

    Invalid issues are skipped one by one (with a warning) rather than
    failing the whole batch, so a single bad match never hides the others.

    Args:
        text: The original text the offsets refer to
        issues: Raw issues in any order

    Returns:
        The valid issues in ascending order
    """

    text_length = len(text)
    valid: list[LanguageIssue] = []
    for issue in issues:
        if not is_within_bounds(issue, text_length):
            LOGGER.warning(
                "Dropping issue with span [%d, %d) outside text of length %d (rule=%s)",
                issue.offset,
                issue.end,
                text_length,
                issue.rule_id or "unknown",
            )
            continue
        valid.append(issue)
    return ascending_order(valid)


def resolve_overlaps(
    issues: Iterable[LanguageIssue],
) -> tuple[list[LanguageIssue], list[LanguageIssue]]:
    """Split issues into those that can be rendered and those that overlap.

    Issues are walked in ascending order with a cursor at the end of the last
    kept span. An issue starting before the cursor is skipped, whether it is
    contained in the previous span or only partly overlaps it.

    Returns:
        A ``(kept, skipped)`` tuple, both in ascending order
    """

    kept: list[LanguageIssue] = []
    skipped: list[LanguageIssue] = []
    cursor = 0
    for issue in ascending_order(issues):
        if issue.offset < cursor:
            LOGGER.debug(
                "Skipping issue at [%d, %d) overlapping a previous span ending at %d",
                issue.offset,
                issue.end,
                cursor,
            )
            skipped.append(issue)
            continue
        kept.append(issue)
        cursor = issue.end
    return kept, skipped
