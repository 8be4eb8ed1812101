"""Analysis of a single Markdown document.

An :class:`AnalysisSession` owns its grammar engines and its issue list for
its whole lifetime. Sessions are cheap to reason about but not to create
(each one starts its own LanguageTool instances), so analyse one document per
session and give concurrent analyses their own sessions.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from src.models import AnalysisResult, Issue, SourceLocation

from .document_tree import build_markdown_parser, load_document
from .document_walker import walk
from .errors import DocumentLoadError, GrammarCheckError, MalformedInlineMarkupError
from .grammar_engine import LanguageToolEngine
from .inline_markup import extract_inline_suppressions
from .language_tool_manager import LanguageToolManager
from .markup_check_config import MarkupCheckSettings
from .match_reconciler import reconcile

LOGGER = logging.getLogger(__name__)


def _create_language_tool_manager(settings: MarkupCheckSettings) -> LanguageToolManager:
    return LanguageToolManager(
        ignored_words=settings.ignored_words,
        disabled_rules=settings.disabled_rules,
        base_language=settings.language,
        remote_server=settings.remote_server,
        logger=LOGGER,
    )


class AnalysisSession:
    """Walks one document, checks every line and accumulates issues."""

    def __init__(
        self,
        settings: MarkupCheckSettings | None = None,
        *,
        engine: LanguageToolEngine | None = None,
        auxiliary_engines: Iterable[LanguageToolEngine] | None = None,
        manager: LanguageToolManager | None = None,
    ) -> None:
        self.settings = settings or MarkupCheckSettings()
        self.issues: list[Issue] = []
        self._parser = build_markdown_parser()

        if engine is not None:
            self.engine = engine
            self.auxiliary_engines = list(auxiliary_engines or [])
            return

        tool_manager = manager or _create_language_tool_manager(self.settings)
        self.engine = LanguageToolEngine(
            tool_manager.build_tool(self.settings.language),
            language=self.settings.language,
            ignored_terms=tool_manager.ignored_words,
        )
        self.auxiliary_engines = []
        try:
            for language in self.settings.auxiliary_languages:
                self.auxiliary_engines.append(
                    LanguageToolEngine(
                        tool_manager.build_spelling_tool(language),
                        language=language,
                        spelling_only=True,
                    )
                )
        except Exception:
            self.close()
            raise

    def __enter__(self) -> "AnalysisSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close every engine owned by the session."""
        for engine in [self.engine, *self.auxiliary_engines]:
            engine.close()

    def analyze_file(self, path: Path | str) -> AnalysisResult:
        """Read ``path`` as UTF-8 and analyse it.

        Raises:
                OSError: If the file cannot be read.
                DocumentLoadError: If the file is not valid UTF-8 or cannot be
                        parsed.
        """

        document_path = Path(path)
        try:
            text = document_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise DocumentLoadError(document_path, f"not valid UTF-8 ({exc.reason})") from exc
        return self.analyze(text, document_path)

    def analyze(self, document_text: str, base_path: Path | str) -> AnalysisResult:
        """Analyse ``document_text`` and report issues against ``base_path``."""

        path = Path(base_path)
        tree = load_document(document_text, path, parser=self._parser)
        LOGGER.info("Checking %s", path)

        self.issues = []
        for location, ignored in walk(tree):
            self.issues.extend(self._check_line(location, ignored))

        LOGGER.info("Analysis found %d issue(s) in %s", len(self.issues), path.name)
        return AnalysisResult(
            issues=list(self.issues),
            active_rule_catalog=self.engine.active_rules(),
        )

    def _check_line(self, location: SourceLocation, ignored: frozenset[str]) -> list[Issue]:
        try:
            clean_text, regions = extract_inline_suppressions(location.text)
        except MalformedInlineMarkupError as exc:
            LOGGER.warning(
                "%s:%d: %s; checking the raw text instead",
                location.file,
                location.line,
                exc,
            )
            clean_text, regions = location.text, []

        if not clean_text.strip():
            return []

        checked = location.with_text(clean_text)
        try:
            matches = self.engine.check(clean_text)
        except Exception as exc:
            raise GrammarCheckError(
                location.file, location.line, str(exc) or type(exc).__name__
            ) from exc

        issues = reconcile(checked, ignored, regions, matches)
        if not self.auxiliary_engines:
            return issues
        return [issue for issue in issues if not self._accepted_elsewhere(issue)]

    def _accepted_elsewhere(self, issue: Issue) -> bool:
        """Return True when an auxiliary language accepts a flagged spelling."""

        if not issue.is_spelling or not issue.offending_text.strip():
            return False
        for engine in self.auxiliary_engines:
            try:
                accepted = engine.accepts_word(issue.offending_text)
            except Exception as exc:
                raise GrammarCheckError(
                    issue.file, issue.line, f"{engine.language}: {exc}"
                ) from exc
            if accepted:
                LOGGER.debug(
                    "%s:%d: %r accepted by %s",
                    issue.file,
                    issue.line,
                    issue.offending_text,
                    engine.language,
                )
                return True
        return False
