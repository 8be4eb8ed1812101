"""Markup check package exports.

This package exposes the key helpers used by other parts of the project
so callers can import from ``src.markup_check``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    # Only for type checkers; not executed at runtime
    from .analysis_session import AnalysisSession
    from .document_tree import DocumentNode, DocumentTree, load_document
    from .document_walker import walk
    from .errors import (
        DocumentLoadError,
        GrammarCheckError,
        MalformedInlineMarkupError,
        MarkupCheckError,
    )
    from .grammar_engine import LanguageToolEngine
    from .ignore_hierarchy import resolve_ignored_rules
    from .inline_markup import extract_inline_suppressions, strip_inline_markup
    from .language_tool_manager import LanguageToolManager
    from .markup_check import check_document, iter_markup_documents, run_markup_checks
    from .markup_check_config import (
        DEFAULT_DISABLED_RULES,
        DEFAULT_IGNORED_WORDS,
        MarkupCheckSettings,
    )
    from .match_reconciler import reconcile
    from .report_utils import build_report_csv, build_report_markdown

__all__ = [
    "AnalysisSession",
    "DocumentNode",
    "DocumentTree",
    "load_document",
    "walk",
    "resolve_ignored_rules",
    "extract_inline_suppressions",
    "strip_inline_markup",
    "reconcile",
    "LanguageToolEngine",
    "LanguageToolManager",
    "check_document",
    "iter_markup_documents",
    "run_markup_checks",
    "build_report_markdown",
    "build_report_csv",
    "MarkupCheckSettings",
    "DEFAULT_DISABLED_RULES",
    "DEFAULT_IGNORED_WORDS",
    "MarkupCheckError",
    "DocumentLoadError",
    "MalformedInlineMarkupError",
    "GrammarCheckError",
]

_LAZY_EXPORTS = {
    # attribute -> (module, attribute)
    "AnalysisSession": (".analysis_session", "AnalysisSession"),
    "DocumentNode": (".document_tree", "DocumentNode"),
    "DocumentTree": (".document_tree", "DocumentTree"),
    "load_document": (".document_tree", "load_document"),
    "walk": (".document_walker", "walk"),
    "resolve_ignored_rules": (".ignore_hierarchy", "resolve_ignored_rules"),
    "extract_inline_suppressions": (".inline_markup", "extract_inline_suppressions"),
    "strip_inline_markup": (".inline_markup", "strip_inline_markup"),
    "reconcile": (".match_reconciler", "reconcile"),
    "LanguageToolEngine": (".grammar_engine", "LanguageToolEngine"),
    "LanguageToolManager": (".language_tool_manager", "LanguageToolManager"),
    "check_document": (".markup_check", "check_document"),
    "iter_markup_documents": (".markup_check", "iter_markup_documents"),
    "run_markup_checks": (".markup_check", "run_markup_checks"),
    "build_report_csv": (".report_utils", "build_report_csv"),
    "build_report_markdown": (".report_utils", "build_report_markdown"),
    "MarkupCheckSettings": (".markup_check_config", "MarkupCheckSettings"),
    "DEFAULT_DISABLED_RULES": (".markup_check_config", "DEFAULT_DISABLED_RULES"),
    "DEFAULT_IGNORED_WORDS": (".markup_check_config", "DEFAULT_IGNORED_WORDS"),
    "MarkupCheckError": (".errors", "MarkupCheckError"),
    "DocumentLoadError": (".errors", "DocumentLoadError"),
    "MalformedInlineMarkupError": (".errors", "MalformedInlineMarkupError"),
    "GrammarCheckError": (".errors", "GrammarCheckError"),
}


def __getattr__(name: str):
    """Lazily import and return exported attributes.

    This avoids importing submodules until actually used, which keeps
    ``import src.markup_check`` cheap for callers that only need the models.
    """

    if name in _LAZY_EXPORTS:
        module_name, attr = _LAZY_EXPORTS[name]
        from importlib import import_module

        mod = import_module(f"src.markup_check{module_name}")
        value = getattr(mod, attr)
        globals()[name] = value
        return value
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_LAZY_EXPORTS.keys()))
