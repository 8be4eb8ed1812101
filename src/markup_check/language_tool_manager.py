"""LanguageTool setup helpers.

This module centralises LanguageTool instantiation so that dictionary
updates (custom spellings), disabled rules and the spelling-only auxiliary
tools are configured in one place.
"""

from __future__ import annotations

from typing import Iterable, Any
import logging

import language_tool_python

from .markup_check_config import DEFAULT_LANGUAGE, SPELLING_CATEGORY

# Default LanguageTool server configuration.
#
# Lines are short, but a session checks thousands of them against one local
# server; keep the server's own request limiting out of the way.
_DEFAULT_CONFIG = {
    "requestLimitPeriodInSeconds": 60,
    "maxCheckTimeMillis": 120000,
}


class LanguageToolManager:
    """Factory class responsible for configuring LanguageTool instances."""

    def __init__(
        self,
        *,
        ignored_words: Iterable[str] | None = None,
        disabled_rules: Iterable[str] | None = None,
        base_language: str = DEFAULT_LANGUAGE,
        remote_server: str | None = None,
        config: dict[str, Any] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.base_language = base_language
        self.remote_server = remote_server
        self.logger = logger or logging.getLogger(__name__)
        self.config = dict(config) if config is not None else dict(_DEFAULT_CONFIG)
        self.disabled_rules = set(disabled_rules or [])
        self._ignored_words = self._prepare_ignored_words(ignored_words)

    @property
    def ignored_words(self) -> tuple[str, ...]:
        return self._ignored_words

    @staticmethod
    def _prepare_ignored_words(words: Iterable[str] | None) -> tuple[str, ...]:
        if not words:
            return tuple()
        deduped: list[str] = []
        seen: set[str] = set()
        for word in words:
            if word is None:
                continue
            cleaned = word.strip()
            if not cleaned or cleaned in seen:
                continue
            deduped.append(cleaned)
            seen.add(cleaned)
        deduped.sort()
        return tuple(deduped)

    def _new_spellings(self) -> list[str] | None:
        # The spelling dictionary only accepts single tokens.
        spellings = [word for word in self._ignored_words if " " not in word]
        return spellings or None

    def _construct(self, language: str, kwargs: dict[str, Any]) -> Any:
        if self.config and self.remote_server is None:
            kwargs["config"] = self.config
        if self.remote_server is not None:
            kwargs["remote_server"] = self.remote_server

        try:
            return language_tool_python.LanguageTool(language, **kwargs)
        except TypeError:
            if "config" in kwargs:
                # Older language_tool_python versions do not accept config.
                kwargs.pop("config")
                self.logger.info(
                    "LanguageTool does not accept 'config'; falling back to default constructor",
                )
                return language_tool_python.LanguageTool(language, **kwargs)
            raise

    def build_tool(self, language: str | None = None) -> Any:
        """Build the primary LanguageTool instance for ``language``.

        Ignored words are registered as session-scoped custom spellings; they
        are removed again from the local dictionary when the tool is closed.
        """

        language = language or self.base_language
        kwargs: dict[str, Any] = {}
        new_spellings = self._new_spellings()
        if new_spellings:
            self.logger.info(
                "Registering %d custom spellings with LanguageTool (%s)",
                len(new_spellings),
                language,
            )
            kwargs["newSpellings"] = new_spellings
            kwargs["new_spellings_persist"] = False

        tool = self._construct(language, kwargs)

        if self.disabled_rules:
            tool.disabled_rules = set(self.disabled_rules)
        self.logger.info("Created LanguageTool for language: %s", language)
        return tool

    def build_spelling_tool(self, language: str) -> Any:
        """Build an auxiliary LanguageTool restricted to spelling checks."""

        tool = self._construct(language, {})
        tool.enabled_categories = {SPELLING_CATEGORY}
        tool.enabled_rules_only = True
        self.logger.info("Created spelling-only LanguageTool for language: %s", language)
        return tool
