"""Offset-based text correction helpers.

This package exposes the normalizer, the three renderers and the issue
list builder so callers can import from ``src.correction``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .categorizer import categorize
    from .issue_list import build_issue_records
    from .markup import escape_markup
    from .normalizer import ascending_order, descending_order, normalize, resolve_overlaps
    from .renderer import (
        apply_corrections,
        highlight_corrected,
        highlight_original,
        splice_spans,
    )

__all__ = [
    "apply_corrections",
    "ascending_order",
    "build_issue_records",
    "categorize",
    "descending_order",
    "escape_markup",
    "highlight_corrected",
    "highlight_original",
    "normalize",
    "resolve_overlaps",
    "splice_spans",
]

_LAZY_EXPORTS = {
    # attribute -> (module, attribute)
    "apply_corrections": (".renderer", "apply_corrections"),
    "highlight_corrected": (".renderer", "highlight_corrected"),
    "highlight_original": (".renderer", "highlight_original"),
    "splice_spans": (".renderer", "splice_spans"),
    "ascending_order": (".normalizer", "ascending_order"),
    "descending_order": (".normalizer", "descending_order"),
    "normalize": (".normalizer", "normalize"),
    "resolve_overlaps": (".normalizer", "resolve_overlaps"),
    "build_issue_records": (".issue_list", "build_issue_records"),
    "categorize": (".categorizer", "categorize"),
    "escape_markup": (".markup", "escape_markup"),
}


def __getattr__(name: str):
    """Lazily import and return exported attributes.

    The categorizer is imported by :mod:`src.models` while that package is
    still initialising, so submodules must not be pulled in eagerly here.
    """

    if name in _LAZY_EXPORTS:
        module_name, attr = _LAZY_EXPORTS[name]
        from importlib import import_module

        mod = import_module(f"src.correction{module_name}")
        value = getattr(mod, attr)
        globals()[name] = value
        return value
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_LAZY_EXPORTS.keys()))
