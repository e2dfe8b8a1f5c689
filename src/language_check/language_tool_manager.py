"""Local LanguageTool backend.

:class:`LanguageToolManager` centralises ``language_tool_python``
instantiation so custom spellings and disabled rules stay in one place.
:class:`LocalLanguageToolChecker` adapts the resulting tool to the
:class:`~src.language_check.checker.IssueChecker` contract.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import language_tool_python
from language_tool_python.exceptions import LanguageToolError
from pydantic import ValidationError

from src.models import LanguageIssue

from .checker import ServiceError
from .language_check_config import (
    DEFAULT_DISABLED_RULES,
    DEFAULT_IGNORED_WORDS,
    DEFAULT_LANGUAGE,
)

LOGGER = logging.getLogger(__name__)

# language_tool_python reports a missing or too old Java install with
# ModuleNotFoundError and SystemError rather than its own exceptions.
_STARTUP_ERRORS = (LanguageToolError, OSError, ModuleNotFoundError, SystemError)

# The Java server's default check time limit aborts long pasted texts.
_DEFAULT_CONFIG = {
    "requestLimitPeriodInSeconds": 60,
    "maxCheckTimeMillis": 60000,
}


class LanguageToolManager:
    """Factory class responsible for configuring LanguageTool instances."""

    def __init__(
        self,
        *,
        ignored_words: Iterable[str] | None = None,
        disabled_rules: Iterable[str] | None = None,
        config: dict[str, Any] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.logger = logger or LOGGER
        self.config = dict(config) if config is not None else dict(_DEFAULT_CONFIG)
        self.disabled_rules = set(
            DEFAULT_DISABLED_RULES if disabled_rules is None else disabled_rules
        )
        self._ignored_words = self._prepare_ignored_words(
            DEFAULT_IGNORED_WORDS if ignored_words is None else ignored_words
        )

    @staticmethod
    def _prepare_ignored_words(words: Iterable[str] | None) -> tuple[str, ...]:
        if not words:
            return tuple()
        deduped: set[str] = set()
        for word in words:
            if word is None:
                continue
            cleaned = word.strip()
            if cleaned:
                deduped.add(cleaned)
        return tuple(sorted(deduped))

    def build_tool(self, language: str = DEFAULT_LANGUAGE) -> Any:
        """Build a LanguageTool instance for ``language``."""

        kwargs: dict[str, Any] = {}
        if self.config:
            kwargs["config"] = self.config
        if self._ignored_words:
            self.logger.info(
                "Registering %d custom spellings with LanguageTool",
                len(self._ignored_words),
            )
            kwargs["new_spellings"] = list(self._ignored_words)
            kwargs["new_spellings_persist"] = False

        tool = language_tool_python.LanguageTool(language, **kwargs)
        if self.disabled_rules:
            tool.disabled_rules = set(self.disabled_rules)
        return tool


def issue_from_tool_match(match: object) -> LanguageIssue:
    """Convert a ``language_tool_python`` match object into an issue.

    Raises:
        pydantic.ValidationError: If the match has no usable offset or length
    """

    return LanguageIssue(
        offset=getattr(match, "offset", None),
        length=getattr(match, "error_length", None),
        message=getattr(match, "message", ""),
        replacements=list(getattr(match, "replacements", []) or []),
        rule_id=getattr(match, "rule_id", ""),
        rule_category_id=getattr(match, "category", ""),
        rule_issue_type=getattr(match, "rule_issue_type", ""),
    )


class LocalLanguageToolChecker:
    """Checks text with a LanguageTool server managed by ``language_tool_python``."""

    name = "local"

    def __init__(
        self,
        language: str = DEFAULT_LANGUAGE,
        *,
        manager: LanguageToolManager | None = None,
        tool: Any | None = None,
    ) -> None:
        """
        Raises:
            ServiceError: If the local LanguageTool server cannot be started
        """
        self.language = language
        if tool is None:
            try:
                tool = (manager or LanguageToolManager()).build_tool(language)
            except _STARTUP_ERRORS as exc:
                raise ServiceError(f"Could not start local LanguageTool: {exc}") from exc
            self._owns_tool = True
        else:
            # Don't close externally provided tools
            self._owns_tool = False
        self._tool = tool

    def check(self, text: str) -> list[LanguageIssue]:
        """Run ``text`` through the local tool.

        Raises:
            ServiceError: If the LanguageTool server fails
        """

        try:
            matches = self._tool.check(text)
        except LanguageToolError as exc:
            raise ServiceError(f"Local LanguageTool check failed: {exc}") from exc

        issues: list[LanguageIssue] = []
        for match in matches or []:
            try:
                issues.append(issue_from_tool_match(match))
            except ValidationError:
                LOGGER.warning(
                    "Skipping malformed LanguageTool match (rule=%s)",
                    getattr(match, "rule_id", "unknown"),
                )
        return issues

    def close(self) -> None:
        if self._owns_tool and hasattr(self._tool, "close"):
            self._tool.close()
