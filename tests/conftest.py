from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.markup_check.analysis_session import AnalysisSession
from src.markup_check.grammar_engine import LanguageToolEngine

SPELLING_RULE = "MORFOLOGIK_RULE_EN_GB"

# word -> (rule id, replacements, issue type, category)
DEFAULT_FLAGGED: dict[str, tuple[str, list[str], str, str]] = {
    "Ths": (SPELLING_RULE, ["This", "The"], "misspelling", "TYPOS"),
    "tst": (SPELLING_RULE, ["test"], "misspelling", "TYPOS"),
    "very unique": ("EN_UNIQUE", ["unique"], "style", "STYLE"),
}


class DummyMatch:
    """Mirrors the attributes of ``language_tool_python.Match``."""

    def __init__(
        self,
        rule_id: str,
        offset: int,
        length: int,
        replacements: list[str],
        issue_type: str,
        category: str,
        context: str,
    ) -> None:
        self.ruleId = rule_id
        self.message = "Possible spelling mistake found." if category == "TYPOS" else "Style issue."
        self.replacements = list(replacements)
        self.offset = offset
        self.errorLength = length
        self.ruleIssueType = issue_type
        self.category = category
        self.context = context
        self.offsetInContext = offset


class DummyTool:
    """Stand-in for ``language_tool_python.LanguageTool`` that flags fixed words."""

    def __init__(
        self,
        flagged: dict[str, tuple[str, list[str], str, str]] | None = None,
        *,
        language: str = "en-GB",
        fail_with: Exception | None = None,
    ) -> None:
        self.language = language
        self.flagged = DEFAULT_FLAGGED if flagged is None else flagged
        self.fail_with = fail_with
        self.disabled_rules: set[str] = set()
        self.checked: list[str] = []
        self.closed = False

    def check(self, text: str) -> list[DummyMatch]:
        self.checked.append(text)
        if self.fail_with is not None:
            raise self.fail_with
        matches: list[DummyMatch] = []
        for word, (rule_id, replacements, issue_type, category) in self.flagged.items():
            if rule_id in self.disabled_rules:
                continue
            for found in re.finditer(rf"(?<!\w){re.escape(word)}(?!\w)", text):
                matches.append(
                    DummyMatch(
                        rule_id,
                        found.start(),
                        len(word),
                        replacements,
                        issue_type,
                        category,
                        text,
                    )
                )
        matches.sort(key=lambda match: match.offset)
        return matches

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_tool() -> Any:
    """Factory for dummy LanguageTool instances."""
    return DummyTool


@pytest.fixture
def dummy_tool() -> DummyTool:
    return DummyTool()


@pytest.fixture
def session(dummy_tool: DummyTool) -> AnalysisSession:
    return AnalysisSession(engine=LanguageToolEngine(dummy_tool, language="en-GB"))
