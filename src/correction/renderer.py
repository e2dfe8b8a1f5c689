"""Turn an original text and its issues into the corrected text and markup.

All three renderers are pure functions of ``(text, issues)``. They share the
same preparation step: issues outside the text are dropped and overlapping
issues are skipped (see :mod:`src.correction.normalizer`), so the corrected
text and both annotated views always agree on which issues were applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from src.models import LanguageIssue

from .markup import correction_marker, error_marker, escape_markup
from .normalizer import descending_order, normalize, resolve_overlaps

LOGGER = logging.getLogger(__name__)

# Returns the marker for an issue, or None to leave its span as plain text.
SpanRenderer = Callable[[LanguageIssue, str], "str | None"]


@dataclass(frozen=True)
class SpliceResult:
    """Markup produced by :func:`splice_spans`.

    ``anchors`` pairs every emitted marker with the index in ``markup`` where
    it starts.
    """

    markup: str
    anchors: tuple[tuple[LanguageIssue, int], ...]


def renderable_issues(text: str, issues: Iterable[LanguageIssue]) -> list[LanguageIssue]:
    """Return the in-bounds, non-overlapping issues in ascending order."""

    kept, skipped = resolve_overlaps(normalize(text, issues))
    if skipped:
        LOGGER.warning(
            "Skipped %d issue(s) overlapping an earlier span", len(skipped)
        )
    return kept


def splice_spans(
    text: str, issues: Sequence[LanguageIssue], render: SpanRenderer
) -> SpliceResult:
    """Walk ``text`` once, escaping plain text and inserting markers.

    ``issues`` must be in ascending order without overlaps. Offsets stay in
    original-text coordinates; ``offset_delta`` tracks how far the output has
    drifted from them (escaping and markers both add characters, a shorter
    replacement removes some), so each marker lands at
    ``issue.offset + offset_delta``.
    """

    pieces: list[str] = []
    anchors: list[tuple[LanguageIssue, int]] = []
    offset_delta = 0
    cursor = 0

    for issue in issues:
        if issue.offset < cursor:
            raise ValueError(
                f"Issue at offset {issue.offset} overlaps a span ending at {cursor}"
            )
        plain = escape_markup(text[cursor : issue.offset])
        pieces.append(plain)
        offset_delta += len(plain) - (issue.offset - cursor)

        span_text = text[issue.offset : issue.end]
        marker = render(issue, span_text)
        if marker is None:
            marker = escape_markup(span_text)
        else:
            anchors.append((issue, issue.offset + offset_delta))
        pieces.append(marker)
        offset_delta += len(marker) - issue.length
        cursor = issue.end

    pieces.append(escape_markup(text[cursor:]))
    return SpliceResult(markup="".join(pieces), anchors=tuple(anchors))


def apply_corrections(text: str, issues: Iterable[LanguageIssue]) -> str:
    """Return ``text`` with the first suggestion of every issue applied.

    Edits are made right to left so each splice leaves the offsets of the
    issues still to be applied untouched. Issues without a suggestion keep
    their original span.
    """

    result = text
    for issue in descending_order(renderable_issues(text, issues)):
        replacement = issue.first_replacement
        if replacement is None:
            continue
        result = result[: issue.offset] + replacement + result[issue.end :]
    return result


def _mark_error(issue: LanguageIssue, span_text: str) -> str:
    return error_marker(span_text, issue.message)


def _mark_correction(issue: LanguageIssue, span_text: str) -> str | None:
    replacement = issue.first_replacement
    if replacement is None:
        return None
    return correction_marker(replacement)


def highlight_original(text: str, issues: Iterable[LanguageIssue]) -> str:
    """Return escaped ``text`` with every flagged span wrapped in an error marker."""
    return splice_spans(text, renderable_issues(text, issues), _mark_error).markup


def highlight_corrected(text: str, issues: Iterable[LanguageIssue]) -> str:
    """Return the corrected text as markup with each replacement wrapped.

    ``text`` is the original text; spans without a suggestion are emitted
    unchanged.
    """
    return splice_spans(text, renderable_issues(text, issues), _mark_correction).markup
