"""Allow ``python -m src.markup_check``."""

from __future__ import annotations

from .markup_check import main

if __name__ == "__main__":
    raise SystemExit(main())
