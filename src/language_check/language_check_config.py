"""Configuration for talking to the checking service.

Defaults live at module level; :class:`CheckerSettings` layers environment
variables (optionally loaded from a ``.env`` file) on top of them. Command
line flags are applied last by the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_API_URL = "https://api.languagetool.org/v2/check"
DEFAULT_LANGUAGE = "en-US"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_BASE_DELAY = 1.0
DEFAULT_RETRY_MAX_DELAY = 10.0

# Rules disabled for the local LanguageTool backend. Whitespace rules fire on
# pasted text far more often than they help.
DEFAULT_DISABLED_RULES = {
    "WHITESPACE_RULE",
    "CONSECUTIVE_SPACES",
}

# Words never reported as misspellings by the local backend (case-sensitive).
DEFAULT_IGNORED_WORDS: set[str] = set()

ENV_PREFIX = "CORRECTOR"


def _env(name: str) -> str | None:
    value = os.environ.get(f"{ENV_PREFIX}_{name}")
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class CheckerSettings:
    """Resolved settings for one run."""

    api_url: str = DEFAULT_API_URL
    language: str = DEFAULT_LANGUAGE
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY
    retry_max_delay: float = DEFAULT_RETRY_MAX_DELAY

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> "CheckerSettings":
        """Build settings from ``CORRECTOR_*`` environment variables.

        A ``.env`` file is loaded first without overriding variables that are
        already set, so explicit environment values take precedence.

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """

        if dotenv_path is not None:
            load_dotenv(dotenv_path=Path(dotenv_path))
        else:
            load_dotenv()

        settings = cls()
        overrides: dict[str, object] = {}
        if (api_url := _env("API_URL")) is not None:
            overrides["api_url"] = api_url
        if (language := _env("LANGUAGE")) is not None:
            overrides["language"] = language
        if (timeout := _env("TIMEOUT")) is not None:
            try:
                overrides["timeout"] = float(timeout)
            except ValueError as exc:
                raise ValueError(
                    f"{ENV_PREFIX}_TIMEOUT must be a number, got {timeout!r}"
                ) from exc
        if (max_retries := _env("MAX_RETRIES")) is not None:
            try:
                overrides["max_retries"] = int(max_retries)
            except ValueError as exc:
                raise ValueError(
                    f"{ENV_PREFIX}_MAX_RETRIES must be an integer, got {max_retries!r}"
                ) from exc
        return replace(settings, **overrides) if overrides else settings

    def with_overrides(self, **values: object) -> "CheckerSettings":
        """Return a copy with every non-``None`` value applied."""
        applied = {key: value for key, value in values.items() if value is not None}
        return replace(self, **applied) if applied else self
