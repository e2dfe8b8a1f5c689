"""Map service rule metadata onto the four display categories."""

from __future__ import annotations

from src.models.enums import IssueCategory

# Ordered: the first rule whose needle appears in the named field wins.
# Each entry is (category, substrings in the category id, substrings in the issue type).
_CATEGORY_RULES: tuple[tuple[IssueCategory, tuple[str, ...], tuple[str, ...]], ...] = (
    (IssueCategory.SPELLING, ("typo",), ("misspelling",)),
    (IssueCategory.STYLE, ("style",), ("style",)),
    (IssueCategory.GRAMMAR, ("grammar",), ("grammar",)),
    (IssueCategory.CLARITY, ("redundancy",), ("clarity",)),
)

DEFAULT_CATEGORY = IssueCategory.GRAMMAR


def categorize(category_id: str | None, issue_type: str | None = None) -> IssueCategory:
    """Classify an issue from its rule category id and issue type.

    Matching is a case-insensitive substring test. Anything that matches no
    rule falls back to :data:`DEFAULT_CATEGORY`.
    """

    category = (category_id or "").lower()
    kind = (issue_type or "").lower()
    for result, category_needles, type_needles in _CATEGORY_RULES:
        if any(needle in category for needle in category_needles):
            return result
        if any(needle in kind for needle in type_needles):
            return result
    return DEFAULT_CATEGORY
