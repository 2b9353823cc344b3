"""Shared validators - pure functions returning Result types."""

from __future__ import annotations

from pathlib import Path

from .types import Failure, Result, Success


def validate_draft_path(path: Path) -> Result[Path]:
    """Validate that a draft file exists."""
    if not path.exists():
        return Failure(f"Draft not found: {path}", {"hint": "Create one with: carousel new <draft>"})
    if not path.is_file():
        return Failure(f"Not a file: {path}")
    return Success(path)


def validate_scale(scale: float) -> Result[float]:
    """Validate a render scale factor."""
    if not 0 < scale <= 4:
        return Failure(f"Invalid scale: {scale}", {"hint": "Scale must be in (0, 4]"})
    return Success(scale)
