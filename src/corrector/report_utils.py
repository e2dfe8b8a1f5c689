"""Utilities for generating the results page and issue list.

This module renders a :class:`~src.models.CheckSession` as a standalone HTML
page (before view, after view, issue list) and as CSV rows. Keeping this
separate from the session logic makes it easy to test on its own.
"""

from __future__ import annotations

from src.correction.markup import escape_markup
from src.models import CheckSession, IssueRecord

NO_SUGGESTION = "[No suggestion]"

CSV_HEADER = ["Category", "Offset", "Length", "Original", "Suggestion", "Message", "Rendered"]

_STYLE = """
body { font-family: sans-serif; max-width: 960px; margin: 2em auto; color: #222; }
.panel { border: 1px solid #ddd; border-radius: 6px; padding: 1em; margin-bottom: 1.5em; white-space: pre-wrap; }
.error { background: #ffebee; border-bottom: 2px solid #e53935; cursor: help; }
.correction { background: #e8f5e9; border-bottom: 2px solid #388e3c; }
.issue-item { border-bottom: 1px solid #eee; padding: 0.6em 0; }
.issue-type { display: inline-block; padding: 0 0.5em; border-radius: 4px; color: #fff; font-size: 0.8em; text-transform: uppercase; }
.issue-type.spelling { background: #e53935; }
.issue-type.grammar { background: #1e88e5; }
.issue-type.style { background: #8e24aa; }
.issue-type.clarity { background: #fb8c00; }
.issue-original { text-decoration: line-through; color: #c62828; }
.issue-corrected { color: #2e7d32; font-weight: bold; }
.issue-message { color: #555; font-size: 0.9em; }
.no-issues { text-align: center; color: #2e7d32; }
""".strip()


def _format_suggestion(record: IssueRecord) -> str:
    if record.suggested_replacement is None:
        return NO_SUGGESTION
    return record.suggested_replacement


def build_issue_item(record: IssueRecord) -> str:
    """Return the HTML block for one issue list entry."""

    category = record.category.value
    return "\n".join(
        [
            '<div class="issue-item">',
            f'  <span class="issue-type {category}">{category}</span>',
            "  <div>",
            f'    <span class="issue-original">{escape_markup(record.original_span)}</span>',
            '    <span class="issue-arrow">&rarr;</span>',
            f'    <span class="issue-corrected">{escape_markup(_format_suggestion(record))}</span>',
            "  </div>",
            f'  <div class="issue-message">{escape_markup(record.message)}</div>',
            "</div>",
        ]
    )


def build_results_html(session: CheckSession, *, title: str = "Grammar & Clarity Check") -> str:
    """Convert a session into a complete HTML results page."""

    if session.has_issues:
        after_html = session.annotated_corrected
        issues_html = "\n".join(build_issue_item(record) for record in session.issue_records)
    else:
        after_html = (
            '<div class="no-issues">\n'
            "  <h4>&#10024; Perfect!</h4>\n"
            "  <p>No grammar or clarity issues found.</p>\n"
            "</div>"
        )
        issues_html = (
            '<div class="no-issues">\n'
            "  <p>Your text is clear and error-free!</p>\n"
            "</div>"
        )

    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{escape_markup(title)}</title>",
        f"<style>\n{_STYLE}\n</style>",
        "</head>",
        "<body>",
        f"<h1>{escape_markup(title)}</h1>",
        "<h2>Before</h2>",
        f'<div class="panel" id="beforeText">{session.annotated_original}</div>',
        "<h2>After</h2>",
        f'<div class="panel" id="afterText">{after_html}</div>',
        f"<h2>Issues ({len(session.issue_records)})</h2>",
        f'<div id="issuesList">\n{issues_html}\n</div>',
        "</body>",
        "</html>",
    ]
    return "\n".join(lines) + "\n"


def build_issue_csv(session: CheckSession) -> list[list[str]]:
    """Convert the issue list into CSV rows, header first."""

    rows: list[list[str]] = [list(CSV_HEADER)]
    for record in session.issue_records:
        rows.append(
            [
                record.category.value,
                str(record.offset),
                str(record.length),
                record.original_span,
                _format_suggestion(record),
                record.message,
                "yes" if record.rendered else "no",
            ]
        )
    return rows
