from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from src.models import Issue, RuleDescriptor, SourceLocation


def _location() -> SourceLocation:
    return SourceLocation("Ths is a test.", 4, Path("doc.md"))


def test_issue_valid() -> None:
    issue = Issue(
        location=_location(),
        rule_id="  MORFOLOGIK_RULE_EN_GB ",
        message="Possible spelling mistake found.",
        issue_type="misspelling",
        category="TYPOS",
        offending_text="Ths",
        suggestions="This",
    )

    assert issue.rule_id == "MORFOLOGIK_RULE_EN_GB"
    assert issue.suggestions == ["This"]
    assert issue.line == 4
    assert issue.file == Path("doc.md")
    assert issue.is_spelling


def test_issue_rejects_empty_rule_id() -> None:
    try:
        Issue(location=_location(), rule_id=" ", message="", offending_text="")
        assert False, "Expected ValidationError for rule_id"
    except ValidationError as exc:
        assert "rule_id must not be empty" in str(exc)


def test_issue_rejects_unknown_fields() -> None:
    try:
        Issue(
            location=_location(),
            rule_id="EN_UNIQUE",
            message="Style issue.",
            offending_text="very unique",
            confidence=0.5,
        )
        assert False, "Expected ValidationError for unknown field"
    except ValidationError:
        pass


def test_style_issue_is_not_spelling() -> None:
    issue = Issue(
        location=_location(),
        rule_id="EN_UNIQUE",
        message=None,
        issue_type="style",
        category="STYLE",
        offending_text="very unique",
        suggestions=None,
    )

    assert issue.message == ""
    assert issue.suggestions == []
    assert not issue.is_spelling


def test_rule_descriptor_requires_id() -> None:
    assert RuleDescriptor(id=" EN_A ").id == "EN_A"
    try:
        RuleDescriptor(id="")
        assert False, "Expected ValidationError for id"
    except ValidationError as exc:
        assert "id must not be empty" in str(exc)
