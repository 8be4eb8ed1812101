"""Markup-aware grammar and spelling checker package."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "markup_check",
    "models",
]
