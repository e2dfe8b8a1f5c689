from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from language_tool_python.exceptions import LanguageToolError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import src.language_check.language_tool_manager as lt_mod
from src.language_check import LanguageToolManager, LocalLanguageToolChecker, ServiceError
from src.models import IssueCategory


class DummyLanguageTool:
    instances: list["DummyLanguageTool"] = []

    def __init__(self, language, *args, **kwargs):
        self.language = language
        self.kwargs = kwargs
        self.disabled_rules: set[str] = set()
        self.closed = False
        DummyLanguageTool.instances.append(self)

    def check(self, text: str) -> list:
        return []

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def dummy_tool_class(monkeypatch: pytest.MonkeyPatch):
    DummyLanguageTool.instances = []
    monkeypatch.setattr(lt_mod.language_tool_python, "LanguageTool", DummyLanguageTool)
    return DummyLanguageTool


def test_build_tool_passes_config_and_disabled_rules(dummy_tool_class) -> None:
    tool = LanguageToolManager().build_tool("en-US")

    assert tool.language == "en-US"
    assert tool.kwargs["config"]["maxCheckTimeMillis"] == 60000
    assert "new_spellings" not in tool.kwargs
    assert "WHITESPACE_RULE" in tool.disabled_rules


def test_build_tool_registers_deduplicated_spellings(dummy_tool_class) -> None:
    manager = LanguageToolManager(ignored_words=[" foo ", "foo", "bar", "", None], disabled_rules=[])

    tool = manager.build_tool("en-GB")

    assert tool.kwargs["new_spellings"] == ["bar", "foo"]
    assert tool.disabled_rules == set()


class DummyTool:
    def __init__(self, matches: list | None = None, error: Exception | None = None) -> None:
        self._matches = matches or []
        self._error = error
        self.closed = False

    def check(self, text: str) -> list:
        if self._error is not None:
            raise self._error
        return self._matches

    def close(self) -> None:
        self.closed = True


def _match(**overrides) -> SimpleNamespace:
    values = {
        "offset": 0,
        "error_length": 3,
        "message": "Possible spelling mistake found.",
        "replacements": ["the"],
        "rule_id": "MORFOLOGIK_RULE_EN_US",
        "category": "TYPOS",
        "rule_issue_type": "misspelling",
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def test_local_checker_converts_matches() -> None:
    checker = LocalLanguageToolChecker(tool=DummyTool([_match()]))

    (issue,) = checker.check("teh cat")

    assert issue.offset == 0
    assert issue.length == 3
    assert issue.replacements == ["the"]
    assert issue.rule_id == "MORFOLOGIK_RULE_EN_US"
    assert issue.category == IssueCategory.SPELLING


def test_local_checker_skips_malformed_match() -> None:
    checker = LocalLanguageToolChecker(tool=DummyTool([_match(error_length=None), _match(offset=4)]))

    issues = checker.check("teh teh")

    assert [issue.offset for issue in issues] == [4]


def test_local_checker_wraps_tool_errors() -> None:
    checker = LocalLanguageToolChecker(tool=DummyTool(error=LanguageToolError("server died")))
    with pytest.raises(ServiceError):
        checker.check("text")


def test_external_tool_is_not_closed() -> None:
    tool = DummyTool()
    LocalLanguageToolChecker(tool=tool).close()
    assert tool.closed is False


def test_owned_tool_is_closed(dummy_tool_class) -> None:
    checker = LocalLanguageToolChecker("en-US")
    checker.close()
    assert dummy_tool_class.instances[0].closed is True


@pytest.mark.parametrize(
    "error",
    [
        LanguageToolError("server failed to start"),
        ModuleNotFoundError("No java install detected"),
        SystemError("Detected java 1.8"),
        OSError("port in use"),
    ],
)
def test_startup_failure_raises_service_error(monkeypatch: pytest.MonkeyPatch, error: Exception) -> None:
    def broken_tool(*args, **kwargs):
        raise error

    monkeypatch.setattr(lt_mod.language_tool_python, "LanguageTool", broken_tool)

    with pytest.raises(ServiceError) as excinfo:
        LocalLanguageToolChecker("en-US")

    assert excinfo.value.__cause__ is error
