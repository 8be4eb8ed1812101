"""Normalised view of a single grammar engine match."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

LOGGER = logging.getLogger(__name__)

SPELLING_ISSUE_TYPE = "misspelling"
SPELLING_CATEGORY = "TYPOS"
_SPELLING_RULE_PREFIXES = ("MORFOLOGIK_RULE", "HUNSPELL_RULE", "SPELLING_RULE")


def is_spelling_rule(rule_id: str, issue_type: str = "", category: str = "") -> bool:
    """Return True when the rule belongs to the spell checker family."""
    if issue_type == SPELLING_ISSUE_TYPE or category == SPELLING_CATEGORY:
        return True
    return rule_id.startswith(_SPELLING_RULE_PREFIXES)


@dataclass(frozen=True)
class RuleMatch:
    """A candidate issue reported by the grammar engine for one line.

    ``from_offset`` and ``to_offset`` are 0-based character offsets into the
    exact text that was submitted for checking.
    """

    rule_id: str
    message: str
    from_offset: int
    to_offset: int
    suggestions: tuple[str, ...] = field(default_factory=tuple)
    issue_type: str = "unknown"
    category: str = ""

    @property
    def is_spelling(self) -> bool:
        return is_spelling_rule(self.rule_id, self.issue_type, self.category)

    def span_text(self, text: str) -> str:
        return text[self.from_offset : self.to_offset]

    @classmethod
    def from_tool_match(cls, match: object) -> "RuleMatch":
        """Build a RuleMatch from a ``language_tool_python`` match object.

        Attributes are read defensively because mocks and older library
        versions do not always provide every field.
        """
        rule_id = str(getattr(match, "ruleId", "") or "UNKNOWN")
        message = str(getattr(match, "message", "") or "")
        issue_type = str(getattr(match, "ruleIssueType", "") or "unknown")
        category = str(getattr(match, "category", "") or "")
        replacements = list(getattr(match, "replacements", []) or [])

        try:
            offset = int(getattr(match, "offset", 0) or 0)
        except (TypeError, ValueError):
            LOGGER.warning("Invalid offset for rule %s; defaulting to 0", rule_id)
            offset = 0

        try:
            length = int(getattr(match, "errorLength", 0) or 0)
        except (TypeError, ValueError):
            LOGGER.warning("Invalid errorLength for rule %s; defaulting to 0", rule_id)
            length = 0

        offset = max(offset, 0)
        return cls(
            rule_id=rule_id,
            message=message,
            from_offset=offset,
            to_offset=offset + max(length, 0),
            suggestions=tuple(str(item) for item in replacements),
            issue_type=issue_type,
            category=category,
        )
