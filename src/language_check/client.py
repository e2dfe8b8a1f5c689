"""HTTP client for the LanguageTool ``/v2/check`` endpoint.

The text is sent as a url-encoded POST body so long inputs never hit URL
length limits. Connection-level failures are retried with exponential
backoff; anything else is reported as a :class:`ServiceError`.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable

import requests
from pydantic import ValidationError

from src.models import LanguageIssue

from .checker import RateLimitError, ServiceError
from .language_check_config import CheckerSettings

LOGGER = logging.getLogger(__name__)

# Transient errors that should trigger a retry
TRANSIENT_ERRORS = (
    requests.ConnectionError,
    requests.Timeout,
)

RATE_LIMIT_STATUS_CODES = {426, 429}


def _retry_with_backoff(
    func: Callable[[], Any],
    max_retries: int = 2,
    base_delay: float = 1.0,
    max_delay: float = 10.0,
) -> Any:
    """Execute ``func`` with exponential backoff retry logic.

    Args:
            func: Zero-argument callable performing one attempt
            max_retries: Maximum number of retry attempts (total attempts = max_retries + 1)
            base_delay: Initial delay in seconds
            max_delay: Maximum delay in seconds

    Returns:
            The return value of func

    Raises:
            The last transient exception if all retries fail
    """

    for attempt in range(max_retries + 1):
        try:
            return func()
        except TRANSIENT_ERRORS as exc:
            if attempt >= max_retries:
                LOGGER.error(
                    "Check request failed after %d attempt(s): %s",
                    attempt + 1,
                    exc,
                )
                raise

            delay = base_delay * (2**attempt)
            # Add a small random jitter to avoid a thundering herd
            jitter = random.uniform(0.75, 1.25)
            delay = min(delay * jitter, max_delay)

            LOGGER.warning(
                "Check request attempt %d failed (transient error: %s); "
                "retrying in %.1f second(s)...",
                attempt + 1,
                type(exc).__name__,
                delay,
            )
            time.sleep(delay)

    raise RuntimeError("Retry logic completed without returning or raising")


def _utf16_index_map(text: str) -> list[int]:
    """Map every UTF-16 code unit index of ``text`` to a character index.

    The service counts characters outside the Basic Multilingual Plane (most
    emoji, some CJK) as two units, Python counts them as one. Both surrogate
    halves map to the same character; the final entry maps the end of text.
    """

    positions: list[int] = []
    for index, char in enumerate(text):
        positions.append(index)
        if ord(char) > 0xFFFF:
            positions.append(index)
    positions.append(len(text))
    return positions


def _to_character_offsets(issue: LanguageIssue, index_map: list[int]) -> LanguageIssue:
    end = issue.offset + issue.length
    # Out-of-range spans are left for the normalizer to drop
    if issue.offset < 0 or issue.length <= 0 or end >= len(index_map):
        return issue
    offset = index_map[issue.offset]
    return issue.model_copy(update={"offset": offset, "length": index_map[end] - offset})


def parse_matches(payload: Any, text: str | None = None) -> list[LanguageIssue]:
    """Convert a ``/v2/check`` response body into issues.

    A missing or empty ``matches`` array means no issues. Individual matches
    that cannot be parsed are skipped with a warning. When ``text`` (the
    submitted text) is given, the service's UTF-16 offsets and lengths are
    converted to Python string indices.

    Raises:
        ServiceError: If the payload is not a JSON object or ``matches`` is not a list
    """

    if not isinstance(payload, dict):
        raise ServiceError(
            f"Unexpected response from checking service: {type(payload).__name__}"
        )
    matches = payload.get("matches") or []
    if not isinstance(matches, list):
        raise ServiceError("Unexpected 'matches' value in checking service response")

    index_map = None
    if text is not None and any(ord(char) > 0xFFFF for char in text):
        index_map = _utf16_index_map(text)

    issues: list[LanguageIssue] = []
    for index, match in enumerate(matches):
        if not isinstance(match, dict):
            LOGGER.warning("Skipping match %d: expected an object", index)
            continue
        try:
            issue = LanguageIssue.from_match(match)
        except ValidationError as exc:
            LOGGER.warning(
                "Skipping malformed match %d: %s",
                index,
                exc.errors(include_url=False),
            )
            continue
        if index_map is not None:
            issue = _to_character_offsets(issue, index_map)
        issues.append(issue)
    return issues


class LanguageToolClient:
    """Checks text against a remote LanguageTool server."""

    name = "remote"

    def __init__(
        self,
        settings: CheckerSettings | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings or CheckerSettings()
        self._session = session or requests.Session()
        self._owns_session = session is None

    def _post(self, text: str) -> requests.Response:
        return self._session.post(
            self.settings.api_url,
            data={"text": text, "language": self.settings.language},
            headers={"Accept": "application/json"},
            timeout=self.settings.timeout,
        )

    def check(self, text: str) -> list[LanguageIssue]:
        """Send ``text`` to the service and return the reported issues.

        Raises:
            RateLimitError: If the service rejects the request for rate limiting
            ServiceError: For connection failures, non-success statuses and bad JSON
        """

        LOGGER.info(
            "Checking %d character(s) with %s (language: %s)",
            len(text),
            self.settings.api_url,
            self.settings.language,
        )
        try:
            response = _retry_with_backoff(
                lambda: self._post(text),
                max_retries=self.settings.max_retries,
                base_delay=self.settings.retry_base_delay,
                max_delay=self.settings.retry_max_delay,
            )
        except requests.RequestException as exc:
            raise ServiceError(f"{self.settings.api_url}: {exc}") from exc

        if response.status_code in RATE_LIMIT_STATUS_CODES:
            raise RateLimitError(
                "You have exceeded the rate limit for the LanguageTool API. "
                "Please try again later.",
                status_code=response.status_code,
            )
        if not response.ok:
            raise ServiceError(
                f"Checking service returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ServiceError(
                "Checking service returned an invalid JSON response",
                status_code=response.status_code,
            ) from exc

        issues = parse_matches(payload, text)
        LOGGER.info("Checking service reported %d issue(s)", len(issues))
        return issues

    def close(self) -> None:
        if self._owns_session:
            self._session.close()
