"""Utilities for generating markup check reports.

This module centralises the Markdown and CSV report builders used by the
markup check workflow. Keeping this logic separate makes it easier to
reuse and test independently from the document analysis routines.
"""

from __future__ import annotations

from typing import Iterable, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .markup_check import DocumentReport

CSV_HEADER = [
    "File",
    "Line",
    "Rule ID",
    "Type",
    "Issue",
    "Message",
    "Suggestions",
    "Highlighted Context",
]


def _format_suggestions(suggestions: list[str] | None, max_suggestions: int = 3) -> str:
    """Return a human-friendly, truncated suggestions string.

    If there are no suggestions returns the em-dash used in the Markdown output.
    If there are more than ``max_suggestions`` suggestions, the first
    ``max_suggestions`` are shown followed by "(+N more)".
    """
    if not suggestions:
        return "—"
    if len(suggestions) <= max_suggestions:
        return ", ".join(suggestions)
    visible = ", ".join(suggestions[:max_suggestions])
    remaining = len(suggestions) - max_suggestions
    return f"{visible} (+{remaining} more)"


def _escape(value: str) -> str:
    return value.replace("|", "\\|")


def build_report_markdown(reports: Iterable["DocumentReport"]) -> str:
    """Convert the collected document reports into Markdown output."""

    report_list = sorted(reports, key=lambda item: str(item.path).lower())
    total_documents = len(report_list)
    total_issues = sum(len(report.issues) for report in report_list)

    rule_totals: dict[str, int] = {}
    for report in report_list:
        for issue in report.issues:
            rule_totals[issue.rule_id] = rule_totals.get(issue.rule_id, 0) + 1

    lines: list[str] = []
    lines.append("# Markup Check Report")
    lines.append("")
    lines.append(f"- Checked {total_documents} document(s)")
    lines.append(f"- Total issues found: {total_issues}")

    lines.append("")
    lines.append("## Totals by Rule")
    if rule_totals:
        for rule_id, count in sorted(rule_totals.items(), key=lambda item: (-item[1], item[0])):
            lines.append(f"- `{rule_id}`: {count} issue(s)")
    else:
        lines.append("- No issues found.")

    lines.append("")
    lines.append("---")
    lines.append("")
    lines.append("## Document Details")
    if not report_list:
        lines.append("")
        lines.append("_No documents found for checking._")
        return "\n".join(lines)

    for report in report_list:
        lines.append("")
        lines.append(f"### {report.path}")
        lines.append("")
        if not report.issues:
            lines.append("_No issues found._")
            continue

        lines.append(f"Found {len(report.issues)} issue(s).")
        lines.append("")
        lines.append("| Line | Rule | Type | Issue | Message | Suggestions | Context |")
        lines.append("| --- | --- | --- | --- | --- | --- | --- |")
        for issue in report.issues:
            issue_text = _escape(issue.offending_text) if issue.offending_text else "—"
            context = _escape(issue.highlighted_context) if issue.highlighted_context else "—"
            lines.append(
                f"| {issue.line} | `{issue.rule_id}` | {issue.issue_type} | {issue_text} "
                f"| {_escape(issue.message)} | {_escape(_format_suggestions(issue.suggestions))} "
                f"| {context} |"
            )

    return "\n".join(lines)


def build_report_csv(reports: Iterable["DocumentReport"]) -> list[list[str]]:
    """Convert the collected document reports into CSV data.

    Returns a list of rows, where each row is a list of string values.
    The first row contains the column headers.
    """

    rows: list[list[str]] = [list(CSV_HEADER)]

    for report in sorted(reports, key=lambda item: str(item.path).lower()):
        for issue in report.issues:
            txt = _format_suggestions(issue.suggestions)
            suggestions = "" if txt == "—" else txt
            rows.append([
                str(issue.file),
                str(issue.line),
                issue.rule_id,
                issue.issue_type,
                issue.offending_text,
                issue.message,
                suggestions,
                issue.highlighted_context,
            ])

    return rows
