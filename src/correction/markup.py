"""HTML escaping and the inline markers used by the highlighters."""

from __future__ import annotations

from html import escape

ERROR_CLASS = "error"
CORRECTION_CLASS = "correction"


def escape_markup(text: str) -> str:
    """Escape ``& < > " '`` so ``text`` can be placed in HTML content or attributes."""
    return escape(text, quote=True)


def error_marker(span_text: str, message: str) -> str:
    """Wrap an original span, carrying the issue message as a tooltip."""
    return (
        f'<span class="{ERROR_CLASS}" title="{escape_markup(message)}">'
        f"{escape_markup(span_text)}</span>"
    )


def correction_marker(replacement: str) -> str:
    return f'<span class="{CORRECTION_CLASS}">{escape_markup(replacement)}</span>'
