from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.correction.markup import correction_marker, error_marker, escape_markup
from src.correction.renderer import (
    apply_corrections,
    highlight_corrected,
    highlight_original,
    splice_spans,
)
from src.models import LanguageIssue


def _issue(offset: int, length: int, *replacements: str, message: str = "") -> LanguageIssue:
    return LanguageIssue(
        offset=offset, length=length, replacements=list(replacements), message=message
    )


SCHOOL = "He go to school."
SCHOOL_ISSUE = LanguageIssue(
    offset=3,
    length=2,
    message="Subject-verb agreement",
    replacements=[{"value": "goes"}],
    category="grammar",
)


class TestEmptyIssueSet:
    def test_apply_corrections_is_identity(self) -> None:
        assert apply_corrections("a < b & c", []) == "a < b & c"

    def test_highlights_return_escaped_text(self) -> None:
        assert highlight_original("a < b & c", []) == "a &lt; b &amp; c"
        assert highlight_corrected("a < b & c", []) == "a &lt; b &amp; c"

    def test_empty_text(self) -> None:
        assert apply_corrections("", []) == ""
        assert highlight_original("", []) == ""
        assert highlight_corrected("", []) == ""


class TestSchoolScenario:
    def test_apply_corrections(self) -> None:
        assert apply_corrections(SCHOOL, [SCHOOL_ISSUE]) == "He goes to school."

    def test_highlight_original_marks_span(self) -> None:
        assert highlight_original(SCHOOL, [SCHOOL_ISSUE]) == (
            'He <span class="error" title="Subject-verb agreement">go</span> to school.'
        )

    def test_highlight_corrected_wraps_replacement(self) -> None:
        assert highlight_corrected(SCHOOL, [SCHOOL_ISSUE]) == (
            'He <span class="correction">goes</span> to school.'
        )


def test_spelling_scenario() -> None:
    issue = LanguageIssue(offset=0, length=3, replacements=["the"], rule_category_id="typo")
    assert issue.category.value == "spelling"
    assert apply_corrections("teh cat", [issue]) == "the cat"


def test_no_replacement_leaves_span_uncorrected() -> None:
    issue = _issue(3, 2, message="Check this")

    assert apply_corrections(SCHOOL, [issue]) == SCHOOL
    assert highlight_corrected(SCHOOL, [issue]) == SCHOOL
    assert 'title="Check this">go</span>' in highlight_original(SCHOOL, [issue])


def test_multiple_corrections_apply_regardless_of_order() -> None:
    text = "teh cat sat on teh mat"
    issues = [_issue(8, 3, "stood"), _issue(0, 3, "the"), _issue(15, 3, "the")]

    assert apply_corrections(text, issues) == "the cat stood on the mat"
    assert apply_corrections(text, list(reversed(issues))) == "the cat stood on the mat"


def test_corrections_of_different_lengths_keep_later_positions() -> None:
    text = "teh cat sat on teh mat"
    issues = [_issue(0, 3, "the big"), _issue(8, 3, "is"), _issue(15, 3, "a")]

    assert apply_corrections(text, issues) == "the big cat is on a mat"
    assert highlight_corrected(text, issues) == (
        '<span class="correction">the big</span> cat '
        '<span class="correction">is</span> on '
        '<span class="correction">a</span> mat'
    )


class TestEscaping:
    TEXT = "x<y & teh"

    def test_literal_segments_and_attributes_are_escaped(self) -> None:
        issue = _issue(6, 3, "the", message='Use "the"')
        markup = highlight_original(self.TEXT, [issue])

        assert markup == (
            'x&lt;y &amp; <span class="error" title="Use &quot;the&quot;">teh</span>'
        )

    def test_no_unescaped_input_in_any_output(self) -> None:
        text = "<b>teh</b> & 'q' \"r\""
        issue = _issue(3, 3, "<i>the</i>", message="a & b")

        for markup in (
            highlight_original(text, [issue]),
            highlight_corrected(text, [issue]),
        ):
            assert "<b>" not in markup
            assert "<i>" not in markup
            assert "& " not in markup
            assert "'q'" not in markup

    def test_replacement_is_escaped_inside_marker(self) -> None:
        markup = highlight_corrected("a b", [_issue(2, 1, "<c>")])
        assert markup == 'a <span class="correction">&lt;c&gt;</span>'

    def test_escape_markup_entities(self) -> None:
        assert escape_markup("& < > \" '") == "&amp; &lt; &gt; &quot; &#x27;"


class TestOverlapPolicy:
    TEXT = "hello world"

    def test_contained_issue_is_skipped_by_highlighter(self) -> None:
        issues = [_issue(0, 5, "HELLO", message="A"), _issue(2, 3, "X", message="B")]

        first = highlight_original(self.TEXT, issues)
        second = highlight_original(self.TEXT, list(reversed(issues)))

        assert first == '<span class="error" title="A">hello</span> world'
        assert first == second

    def test_overlap_policy_is_shared_by_all_renderers(self) -> None:
        issues = [_issue(0, 5, "HELLO"), _issue(2, 3, "X")]

        assert apply_corrections(self.TEXT, issues) == "HELLO world"
        assert highlight_corrected(self.TEXT, issues) == (
            '<span class="correction">HELLO</span> world'
        )

    def test_partial_overlap_does_not_corrupt_text(self) -> None:
        issues = [_issue(0, 7, "Hi w"), _issue(4, 4, "zzz")]
        assert apply_corrections(self.TEXT, issues) == "Hi world"


def test_out_of_bounds_issue_is_ignored_by_renderers() -> None:
    issues = [_issue(3, 10, "oops"), _issue(0, 1, "S")]

    assert apply_corrections("short", issues) == "Short"
    assert highlight_original("short", issues) == '<span class="error" title="">s</span>hort'
    assert highlight_corrected("short", issues) == '<span class="correction">S</span>hort'


class TestOffsetDelta:
    def test_anchor_accounts_for_escaping(self) -> None:
        text = "x & y teh z"
        issue = _issue(6, 3, "the")
        result = splice_spans(text, [issue], lambda i, span: correction_marker("the"))

        marker = correction_marker("the")
        assert result.anchors == ((issue, 10),)
        assert result.markup[10 : 10 + len(marker)] == marker

    def test_anchors_accumulate_marker_overhead(self) -> None:
        text = "teh cat sat on teh mat"
        issues = [_issue(0, 3, "the"), _issue(15, 3, "the")]
        result = splice_spans(
            text, issues, lambda issue, span: correction_marker(issue.first_replacement)
        )

        marker = correction_marker("the")
        assert len(marker) == 35
        assert [anchor for _, anchor in result.anchors] == [0, 47]
        for _, anchor in result.anchors:
            assert result.markup[anchor : anchor + len(marker)] == marker

    def test_anchor_after_error_markers(self) -> None:
        text = "aa bb cc"
        issues = [_issue(0, 2, message="m1"), _issue(6, 2, message="m2")]
        result = splice_spans(text, issues, lambda issue, span: error_marker(span, issue.message))

        for issue, anchor in result.anchors:
            marker = error_marker(text[issue.offset : issue.end], issue.message)
            assert result.markup[anchor : anchor + len(marker)] == marker

    def test_spans_rendered_as_plain_text_have_no_anchor(self) -> None:
        result = splice_spans("a b c", [_issue(2, 1)], lambda issue, span: None)
        assert result.markup == "a b c"
        assert result.anchors == ()

    def test_overlapping_input_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            splice_spans("hello", [_issue(0, 3), _issue(1, 3)], lambda i, s: None)
