"""Run one check request and own the resulting session.

:func:`run_check` is the whole request/response cycle for a piece of text.
:class:`CorrectionController` is what a front end talks to: it keeps the
current :class:`~src.models.CheckSession`, refuses overlapping requests and
turns service failures into one user-facing error.
"""

from __future__ import annotations

import contextlib
import logging
from typing import Iterable, Iterator

from src.correction.issue_list import build_issue_records
from src.correction.normalizer import normalize, resolve_overlaps
from src.correction.renderer import (
    apply_corrections,
    highlight_corrected,
    highlight_original,
)
from src.language_check.checker import CorrectorError, IssueChecker, ServiceError
from src.models import CheckSession, LanguageIssue

LOGGER = logging.getLogger(__name__)

FAILURE_NOTICE = (
    "Failed to check grammar. Please check your internet connection and try again."
)
EMPTY_TEXT_NOTICE = "Please enter some text to check!"


class EmptyTextError(CorrectorError):
    """Raised when blank text is submitted for checking."""

    def __init__(self, message: str = EMPTY_TEXT_NOTICE) -> None:
        super().__init__(message)


class CheckInProgressError(CorrectorError):
    """Raised when a check is requested while another one is still running."""


class CheckFailedError(CorrectorError):
    """The single user-visible failure reported for any service problem."""

    def __init__(self, message: str = FAILURE_NOTICE) -> None:
        super().__init__(message)


def build_session(text: str, issues: Iterable[LanguageIssue]) -> CheckSession:
    """Render every artifact for ``text`` and its raw ``issues``.

    Issues are validated and overlaps resolved once here, so each dropped or
    skipped issue is logged once per check.
    """

    ordered = normalize(text, issues)
    kept, skipped = resolve_overlaps(ordered)
    if skipped:
        LOGGER.warning(
            "Skipped %d issue(s) overlapping an earlier span", len(skipped)
        )
    return CheckSession(
        original_text=text,
        corrected_text=apply_corrections(text, kept),
        annotated_original=highlight_original(text, kept),
        annotated_corrected=highlight_corrected(text, kept),
        issues=tuple(ordered),
        issue_records=build_issue_records(text, ordered),
    )


def run_check(text: str, checker: IssueChecker) -> CheckSession:
    """Check ``text`` with ``checker`` and build a fresh session.

    The text is stripped before checking, so offsets refer to the stripped
    text.

    Raises:
        EmptyTextError: If the text is blank; the checker is not called
        ServiceError: If the checker fails
    """

    stripped = (text or "").strip()
    if not stripped:
        raise EmptyTextError()

    issues = checker.check(stripped)
    session = build_session(stripped, issues)
    LOGGER.info(
        "Check complete: %d issue(s), %d rendered",
        len(session.issue_records),
        sum(1 for record in session.issue_records if record.rendered),
    )
    return session


class CorrectionController:
    """Owns the current session and the state of the check trigger."""

    def __init__(self, checker: IssueChecker) -> None:
        self.checker = checker
        self.session: CheckSession | None = None
        self.trigger_enabled = True

    @contextlib.contextmanager
    def _trigger_disabled(self) -> Iterator[None]:
        if not self.trigger_enabled:
            raise CheckInProgressError("A check is already in progress")
        self.trigger_enabled = False
        try:
            yield
        finally:
            self.trigger_enabled = True

    def check(self, text: str) -> CheckSession:
        """Run a check and replace the current session with the result.

        On failure the previous session is kept as it was.

        Raises:
            EmptyTextError: If the text is blank
            CheckInProgressError: If another check is still running
            CheckFailedError: If the checking service failed
        """

        with self._trigger_disabled():
            try:
                session = run_check(text, self.checker)
            except ServiceError as exc:
                LOGGER.exception("Grammar check failed")
                raise CheckFailedError() from exc
        self.session = session
        return session

    def copy_text(self, fallback: str = "") -> str:
        """Text offered for copying: the corrected text, else ``fallback``."""
        if self.session is not None and self.session.corrected_text:
            return self.session.corrected_text
        return fallback
