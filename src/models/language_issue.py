"""Issue model for a single match returned by the checking service.

The model mirrors the fields the service reports for each match and derives
the display category from the rule metadata. Offsets are character indices
into the text that was submitted for checking.
"""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import IssueCategory


class LanguageIssue(BaseModel):
    """A flagged span of the original text with its suggestions.

    Fields:
    - offset: Start of the span in the original text
    - length: Number of characters in the span
    - message: Service-provided explanation
    - replacements: Candidate replacements, best first (may be empty)
    - rule_id: Rule identifier from the service
    - rule_category_id: Rule category id (e.g. "TYPOS", "GRAMMAR")
    - rule_issue_type: Rule issue type (e.g. "misspelling", "style")
    - category: Display category; derived from the rule metadata when omitted

    Bounds are not checked here because the model does not know the text it
    refers to. See :func:`src.correction.normalizer.normalize`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    offset: int
    length: int
    message: str = ""
    replacements: List[str] = Field(default_factory=list)
    rule_id: str = ""
    rule_category_id: str = ""
    rule_issue_type: str = ""
    category: IssueCategory

    @model_validator(mode="before")
    @classmethod
    def _derive_category(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("category"):
            return data
        # Imported here: the categorizer imports the enums from this package
        from src.correction.categorizer import categorize

        return {
            **data,
            "category": categorize(
                str(data.get("rule_category_id") or ""),
                str(data.get("rule_issue_type") or ""),
            ),
        }

    @field_validator("message", "rule_id", "rule_category_id", "rule_issue_type", mode="before")
    def _strip_strings(cls, value: object) -> str:
        return str(value or "").strip()

    @field_validator("replacements", mode="before")
    def _normalise_replacements(cls, value: object) -> List[str]:
        if value is None:
            return []
        if isinstance(value, (str, dict)):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"Invalid replacements value: {value!r}")
        result: list[str] = []
        for item in value:
            # The service wraps each candidate as {"value": "..."}
            if isinstance(item, dict):
                item = item.get("value")
            if item is None:
                continue
            # Replacements are spliced in verbatim, so whitespace is kept
            result.append(str(item))
        return result

    @field_validator("category", mode="before")
    def _normalise_category(cls, value: object) -> IssueCategory:
        if isinstance(value, IssueCategory):
            return value
        try:
            return IssueCategory(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Invalid category value: {value!r}") from exc

    @property
    def end(self) -> int:
        """Exclusive end of the span in original-text coordinates."""
        return self.offset + self.length

    @property
    def first_replacement(self) -> str | None:
        return self.replacements[0] if self.replacements else None

    @classmethod
    def from_match(cls, match: dict) -> "LanguageIssue":
        """Create an issue from one entry of the service's ``matches`` array.

        Args:
            match: A match dict as returned by the ``/v2/check`` endpoint

        Returns:
            A LanguageIssue with the rule metadata flattened onto the model

        Raises:
            pydantic.ValidationError: If offset or length are missing or not
                integers, or replacements is not a list
        """
        rule = match.get("rule")
        if not isinstance(rule, dict):
            rule = {}
        category = rule.get("category")
        if not isinstance(category, dict):
            category = {}
        return cls(
            offset=match.get("offset"),
            length=match.get("length"),
            message=match.get("message", ""),
            replacements=match.get("replacements", []),
            rule_id=rule.get("id", ""),
            rule_category_id=category.get("id", ""),
            rule_issue_type=rule.get("issueType", ""),
        )
