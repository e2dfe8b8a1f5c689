from __future__ import annotations

from typing import Protocol

from src.models import LanguageIssue


class CorrectorError(Exception):
    """Base class for every error raised by this project."""


class ServiceError(CorrectorError):
    """The checking service could not be reached or returned a bad response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(ServiceError):
    """Raised when the service reports that the rate limit was exceeded."""


class IssueChecker(Protocol):
    """Shared contract for checking backends."""

    name: str

    def check(self, text: str) -> list[LanguageIssue]:
        """Return the issues found in ``text`` in service order."""
        ...

    def close(self) -> None:
        """Release any resources held by the backend."""
        ...
