"""Issue model emitted for every grammar engine match that survives filtering."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .rule_match import is_spelling_rule
from .source_location import SourceLocation


class Issue(BaseModel):
    """A single reported problem bound to an exact source location.

    Fields:
    - location: The line the issue was found on (text is the checked text)
    - rule_id: Rule identifier from the grammar engine
    - message: Engine-provided message, verbatim
    - issue_type: Type from the engine (e.g., "misspelling", "grammar")
    - category: Engine rule category (e.g., "TYPOS")
    - offending_text: ``location.text`` sliced with the match offsets
    - suggestions: Ordered replacement suggestions, verbatim
    - highlighted_context: The line with the offending text wrapped in ``**``
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    location: SourceLocation
    rule_id: str
    message: str
    issue_type: str = "unknown"
    category: str = ""
    offending_text: str
    suggestions: List[str] = Field(default_factory=list)
    highlighted_context: str = ""

    @field_validator("rule_id", mode="before")
    def _strip_rule(cls, value: object) -> str:
        result = str(value or "").strip()
        if not result:
            raise ValueError("rule_id must not be empty")
        return result

    @field_validator("message", "issue_type", "category", mode="before")
    def _coerce_strings(cls, value: object) -> str:
        return str(value or "")

    @field_validator("suggestions", mode="before")
    def _normalise_suggestions(cls, value: object) -> List[str]:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(x) for x in value]
        # allow a single suggestion as a bare string
        return [str(value)]

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def file(self) -> Path:
        return self.location.file

    @property
    def is_spelling(self) -> bool:
        return is_spelling_rule(self.rule_id, self.issue_type, self.category)


class RuleDescriptor(BaseModel):
    """Entry of the active rule catalogue exposed with every result."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    description: str = ""
    category: str = ""

    @field_validator("id", mode="before")
    def _strip_id(cls, value: object) -> str:
        result = str(value or "").strip()
        if not result:
            raise ValueError("id must not be empty")
        return result


@dataclass
class AnalysisResult:
    """Issues found in one document plus the rules that were active."""

    issues: list[Issue] = field(default_factory=list)
    active_rule_catalog: list[RuleDescriptor] = field(default_factory=list)
