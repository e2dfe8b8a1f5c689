"""Language check package exports.

This package exposes the checking backends and their configuration so
callers can import from ``src.language_check``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    # These imports are only for type checkers; they are not executed at runtime
    from .checker import CorrectorError, IssueChecker, RateLimitError, ServiceError
    from .client import LanguageToolClient, parse_matches
    from .language_check_config import CheckerSettings
    from .language_tool_manager import LanguageToolManager, LocalLanguageToolChecker

__all__ = [
    "CheckerSettings",
    "CorrectorError",
    "IssueChecker",
    "LanguageToolClient",
    "LanguageToolManager",
    "LocalLanguageToolChecker",
    "RateLimitError",
    "ServiceError",
    "parse_matches",
]

_LAZY_EXPORTS = {
    # attribute -> (module, attribute)
    "CheckerSettings": (".language_check_config", "CheckerSettings"),
    "CorrectorError": (".checker", "CorrectorError"),
    "IssueChecker": (".checker", "IssueChecker"),
    "RateLimitError": (".checker", "RateLimitError"),
    "ServiceError": (".checker", "ServiceError"),
    "LanguageToolClient": (".client", "LanguageToolClient"),
    "parse_matches": (".client", "parse_matches"),
    # Importing language_tool_python is deferred until the local backend is used
    "LanguageToolManager": (".language_tool_manager", "LanguageToolManager"),
    "LocalLanguageToolChecker": (".language_tool_manager", "LocalLanguageToolChecker"),
}


def __getattr__(name: str):
    """Lazily import and return exported attributes."""

    if name in _LAZY_EXPORTS:
        module_name, attr = _LAZY_EXPORTS[name]
        from importlib import import_module

        mod = import_module(f"src.language_check{module_name}")
        value = getattr(mod, attr)
        globals()[name] = value
        return value
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_LAZY_EXPORTS.keys()))
