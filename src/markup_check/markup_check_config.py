"""Configuration for markup checking rules, ignored words and markers.

This module defines the defaults used when checking Markdown documents and
the settings object assembled from the environment and the command line.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping

DEFAULT_LANGUAGE = "en-GB"

# Block attribute naming the rule ids a node (and its descendants) ignores,
# e.g. ``{ignore="MORFOLOGIK_RULE_EN_GB EN_QUOTES"}`` above a paragraph.
SUPPRESSION_ATTRIBUTE = "ignore"

# Class marking an inline element whose text is exempt from the rule ids
# listed as its other classes.
INLINE_SUPPRESSION_CLASS = "ignore"

# Only this rule category stays enabled on auxiliary (second opinion) tools.
SPELLING_CATEGORY = "TYPOS"

# Rules that misfire on line-by-line checks of rendered Markdown.
DEFAULT_DISABLED_RULES = {
    "WHITESPACE_RULE",
    "CONSECUTIVE_SPACES",
    "SENTENCE_WHITESPACE",
    "UPPERCASE_SENTENCE_START",
    "COMMA_PARENTHESIS_WHITESPACE",
    "EN_UNPAIRED_BRACKETS",
    "EN_UNPAIRED_QUOTES",
    "DASH_RULE",
    "PUNCTUATION_PARAGRAPH_END",
}

# Default words to ignore (case-sensitive; can be extended via command-line)
DEFAULT_IGNORED_WORDS = {
    # --- Markup / tooling names ---
    "Markdown", "markdown", "CommonMark", "AsciiDoc", "Asciidoctor", "LanguageTool",
    "HTML", "CSS", "JSON", "YAML", "TOML", "CSV", "URL", "URLs",

    # --- Hardware / acronyms ---
    "CPU", "GPU", "RAM", "SSD", "USB", "API", "APIs", "CLI", "SDK",

    # --- File extensions / media formats ---
    "PNG", "JPEG", "SVG", "PDF", "png", "jpeg", "svg",
}

ENV_LANGUAGE = "MARKUP_CHECK_LANGUAGE"
ENV_AUX_LANGUAGES = "MARKUP_CHECK_AUX_LANGUAGES"
ENV_REMOTE_SERVER = "MARKUP_CHECK_REMOTE_SERVER"


def _split_languages(value: str | None) -> tuple[str, ...]:
    if not value:
        return tuple()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def load_ignored_words_file(path: Path) -> set[str]:
    """Read one ignored term per line; blank lines and ``#`` comments are skipped."""

    words: set[str] = set()
    for raw in path.read_text(encoding="utf-8").splitlines():
        entry = raw.strip()
        if not entry or entry.startswith("#"):
            continue
        words.add(entry)
    return words


@dataclass
class MarkupCheckSettings:
    """Everything needed to construct the grammar engines for a session."""

    language: str = DEFAULT_LANGUAGE
    auxiliary_languages: tuple[str, ...] = field(default_factory=tuple)
    ignored_words: set[str] = field(default_factory=lambda: set(DEFAULT_IGNORED_WORDS))
    disabled_rules: set[str] = field(default_factory=lambda: set(DEFAULT_DISABLED_RULES))
    remote_server: str | None = None

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        language: str | None = None,
        auxiliary_languages: Iterable[str] | None = None,
        ignored_words: Iterable[str] | None = None,
        use_default_words: bool = True,
    ) -> "MarkupCheckSettings":
        """Build settings from explicit values layered over the environment."""

        env = os.environ if environ is None else environ
        words = set(DEFAULT_IGNORED_WORDS) if use_default_words else set()
        if ignored_words:
            words.update(word for word in ignored_words if word)

        aux = tuple(auxiliary_languages or ()) or _split_languages(env.get(ENV_AUX_LANGUAGES))
        return cls(
            language=language or env.get(ENV_LANGUAGE) or DEFAULT_LANGUAGE,
            auxiliary_languages=aux,
            ignored_words=words,
            remote_server=env.get(ENV_REMOTE_SERVER) or None,
        )
