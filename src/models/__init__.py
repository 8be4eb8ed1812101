"""Public model exports for the project.

Keep the :mod:`src` namespace clean; tests and other modules should import
``from src.models import Issue, SourceLocation``.
"""

from __future__ import annotations

from .enums import NodeKind
from .issue import AnalysisResult, Issue, RuleDescriptor
from .rule_match import RuleMatch, is_spelling_rule
from .source_location import InlineSuppressedRegion, SourceLocation

__all__ = [
    "AnalysisResult",
    "InlineSuppressedRegion",
    "Issue",
    "NodeKind",
    "RuleDescriptor",
    "RuleMatch",
    "SourceLocation",
    "is_spelling_rule",
]
