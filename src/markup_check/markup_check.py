"""Grammar, style and spelling checks for Markdown documents.

This module finds the Markdown documents to check, analyses each one in its
own :class:`AnalysisSession` and writes a Markdown report plus a CSV report
that list every issue with its file and line.
"""

from __future__ import annotations

import argparse
import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional

from dotenv import load_dotenv

from src.models import Issue, RuleDescriptor

from .analysis_session import AnalysisSession
from .errors import MarkupCheckError
from .markup_check_config import (
    DEFAULT_IGNORED_WORDS,
    DEFAULT_LANGUAGE,
    MarkupCheckSettings,
    load_ignored_words_file,
)
from .report_utils import build_report_csv, build_report_markdown

LOGGER = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")
DEFAULT_REPORT_NAME = "markup-check-report.md"

EXIT_OK = 0
EXIT_ISSUES_FOUND = 1
EXIT_FATAL = 2

SessionFactory = Callable[[MarkupCheckSettings], AnalysisSession]


@dataclass
class DocumentReport:
    """Compilation of issues for a specific document."""

    path: Path
    issues: list[Issue]
    active_rule_catalog: list[RuleDescriptor] = field(default_factory=list)


def iter_markup_documents(paths: Iterable[Path]) -> list[Path]:
    """Return a sorted, de-duplicated list of Markdown files under ``paths``.

    Files are returned as given; directories are searched recursively.

    Raises:
            FileNotFoundError: If a path does not exist.
    """

    documents: list[Path] = []
    seen: set[Path] = set()
    for path in paths:
        if path.is_file():
            candidates: Iterable[Path] = (path,)
        elif path.is_dir():
            candidates = sorted(
                item
                for item in path.rglob("*")
                if item.is_file() and item.suffix.lower() in MARKDOWN_SUFFIXES
            )
        else:
            raise FileNotFoundError(f"Document not found: {path}")

        for candidate in candidates:
            resolved = candidate.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            documents.append(candidate)
    return documents


def check_document(
    document_path: Path,
    settings: MarkupCheckSettings,
    *,
    session_factory: SessionFactory = AnalysisSession,
) -> DocumentReport:
    """Analyse a single document in a fresh session."""

    with session_factory(settings) as session:
        result = session.analyze_file(document_path)
    return DocumentReport(
        path=document_path,
        issues=result.issues,
        active_rule_catalog=result.active_rule_catalog,
    )


def write_reports(reports: list[DocumentReport], report_path: Path) -> Path:
    """Write the Markdown report and a CSV report with the same stem."""

    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(build_report_markdown(reports), encoding="utf-8")

    csv_path = report_path.with_suffix(".csv")
    with csv_path.open("w", encoding="utf-8", newline="") as csv_file:
        writer = csv.writer(csv_file)
        writer.writerows(build_report_csv(reports))
    return csv_path


def run_markup_checks(
    paths: Iterable[Path],
    *,
    report_path: Path,
    settings: MarkupCheckSettings | None = None,
    session_factory: SessionFactory = AnalysisSession,
) -> list[DocumentReport]:
    """Check every Markdown document under ``paths`` and write the reports.

    Any fatal error aborts the run before a report is written.
    """

    resolved_settings = settings or MarkupCheckSettings()
    documents = iter_markup_documents(paths)

    reports: list[DocumentReport] = []
    running_total = 0
    for document_path in documents:
        LOGGER.info("Checking %s", document_path)
        report = check_document(
            document_path, resolved_settings, session_factory=session_factory
        )
        running_total += len(report.issues)
        LOGGER.info(
            "Completed %s: %d issue(s) (running total: %d)",
            document_path.name,
            len(report.issues),
            running_total,
        )
        reports.append(report)

    write_reports(reports, report_path)
    return reports


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run grammar, style and spelling checks on Markdown documents."
    )
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Markdown files or directories to check (directories are searched recursively).",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=Path(DEFAULT_REPORT_NAME),
        help=f"Path to write the Markdown report (default: {DEFAULT_REPORT_NAME})",
    )
    parser.add_argument(
        "--language",
        default=None,
        help=f"Language code to use for LanguageTool (default: env MARKUP_CHECK_LANGUAGE or {DEFAULT_LANGUAGE})",
    )
    parser.add_argument(
        "--aux-language",
        action="append",
        dest="auxiliary_languages",
        help="Additional language whose spell checker may accept words flagged by the "
        "primary language (can be specified multiple times).",
    )
    parser.add_argument(
        "--ignore-word",
        action="append",
        dest="ignored_words",
        help="Add a word to the ignore list (case-sensitive, can be specified multiple times). "
        f"Default ignored words: {', '.join(sorted(DEFAULT_IGNORED_WORDS))}",
    )
    parser.add_argument(
        "--ignore-words-file",
        type=Path,
        default=None,
        help="File with one ignored word per line ('#' starts a comment).",
    )
    parser.add_argument(
        "--no-default-words",
        action="store_true",
        help="Don't apply default ignored words (only use words specified explicitly)",
    )
    parser.add_argument(
        "--dotenv",
        type=Path,
        default=None,
        help="Path to a .env file with MARKUP_CHECK_* settings (default: ./.env if present)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log suppression decisions and other debug output.",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def settings_from_args(args: argparse.Namespace) -> MarkupCheckSettings:
    ignored_words = set(args.ignored_words or [])
    if args.ignore_words_file is not None:
        ignored_words.update(load_ignored_words_file(args.ignore_words_file))
    return MarkupCheckSettings.from_env(
        language=args.language,
        auxiliary_languages=args.auxiliary_languages,
        ignored_words=ignored_words,
        use_default_words=not args.no_default_words,
    )


def main(
    argv: Optional[Iterable[str]] = None,
    *,
    session_factory: SessionFactory = AnalysisSession,
) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    # Load .env before reading settings so MARKUP_CHECK_* values apply;
    # variables already set in the environment win.
    if args.dotenv is not None:
        load_dotenv(dotenv_path=args.dotenv)
    else:
        load_dotenv()

    try:
        settings = settings_from_args(args)
        reports = run_markup_checks(
            args.paths,
            report_path=args.report,
            settings=settings,
            session_factory=session_factory,
        )
    except (MarkupCheckError, OSError) as exc:
        LOGGER.error("%s", exc)
        return EXIT_FATAL

    total = sum(len(report.issues) for report in reports)
    print(f"Markup check report written to {args.report.resolve()}")
    print(f"CSV report written to {args.report.with_suffix('.csv').resolve()}")
    print(f"Found {total} issue(s) in {len(reports)} document(s)")
    return EXIT_ISSUES_FOUND if total else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
