"""Session-scoped wrapper around a LanguageTool instance.

The wrapper exposes the small surface the analysis needs: checking a line,
disabling rules, extending the ignored terms and listing the rules that were
active during the session.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from src.models import RuleDescriptor, RuleMatch

LOGGER = logging.getLogger(__name__)


def _is_ignored_token(token: str, ignored_terms: set[str]) -> bool:
    # NOTE: matching is case-sensitive because many entries are proper nouns
    # or acronyms.
    if token in ignored_terms:
        return True
    letters = "".join(ch for ch in token if ch.isalpha())
    if letters and (letters.isupper() or letters.rstrip("s").isupper()):
        return letters in ignored_terms or letters.rstrip("s") in ignored_terms
    return False


def covers_only_ignored_terms(text: str, ignored_terms: set[str]) -> bool:
    """Return True when ``text`` consists solely of ignored terms."""

    cleaned = text.strip()
    if not cleaned or not ignored_terms:
        return False
    if cleaned in ignored_terms:
        return True
    return all(_is_ignored_token(token, ignored_terms) for token in cleaned.split())


class LanguageToolEngine:
    """Grammar engine owned by exactly one analysis session.

    Rules are fixed when the tool is built, with one exception. LanguageTool's
    HTTP API does not expose rule patterns, so a non-spelling rule is only
    known to hinge on an ignored term when it flags a span made up solely of
    ignored terms. Such a rule is disabled at that point for the rest of the session and dropped
    from :meth:`active_rules`, so the catalogue can shrink mid-session.
    """

    def __init__(
        self,
        tool: Any,
        *,
        language: str | None = None,
        ignored_terms: Iterable[str] | None = None,
        spelling_only: bool = False,
    ) -> None:
        self._tool = tool
        self.language = language or getattr(tool, "language", None) or "unknown"
        self.spelling_only = spelling_only
        self._ignored_terms: set[str] = set(ignored_terms or ())
        self._disabled_rules: set[str] = set(getattr(tool, "disabled_rules", None) or ())
        self._catalog: dict[str, RuleDescriptor] = {}

    @property
    def disabled_rules(self) -> frozenset[str]:
        return frozenset(self._disabled_rules)

    @property
    def ignored_terms(self) -> frozenset[str]:
        return frozenset(self._ignored_terms)

    def add_ignored_terms(self, terms: Iterable[str]) -> None:
        self._ignored_terms.update(term.strip() for term in terms if term and term.strip())

    def disable_rule(self, rule_id: str) -> None:
        if rule_id in self._disabled_rules:
            return
        self._disabled_rules.add(rule_id)
        self._catalog.pop(rule_id, None)
        self._tool.disabled_rules = set(self._disabled_rules)
        LOGGER.info("Disabled rule %s for %s", rule_id, self.language)

    def check(self, text: str) -> list[RuleMatch]:
        """Check one line and return the matches that are not ignored."""

        matches: list[RuleMatch] = []
        for raw in self._tool.check(text) or []:
            match = RuleMatch.from_tool_match(raw)
            if match.rule_id in self._disabled_rules:
                continue
            if self.spelling_only and not match.is_spelling:
                continue
            if covers_only_ignored_terms(match.span_text(text), self._ignored_terms):
                if not match.is_spelling:
                    # The rule's pattern hinges on an ignored term.
                    self.disable_rule(match.rule_id)
                continue
            self._record(match)
            matches.append(match)
        return matches

    def accepts_word(self, word: str) -> bool:
        """Return True when this engine reports no spelling problem for ``word``."""

        if not word.strip():
            return True
        return not any(match.is_spelling for match in self.check(word))

    def _record(self, match: RuleMatch) -> None:
        if match.rule_id not in self._catalog:
            self._catalog[match.rule_id] = RuleDescriptor(
                id=match.rule_id,
                description=match.message,
                category=match.category,
            )

    def active_rules(self) -> list[RuleDescriptor]:
        """Rules reported during this session that are still enabled."""
        return [
            descriptor
            for rule_id, descriptor in self._catalog.items()
            if rule_id not in self._disabled_rules
        ]

    def close(self) -> None:
        close = getattr(self._tool, "close", None)
        if close is not None:
            close()
