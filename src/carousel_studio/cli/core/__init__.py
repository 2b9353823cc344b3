"""Core utilities for CLI - pure functions and shared types."""

from .console import console, print_error, print_warning
from .types import DeckSummary, ExportResult, Failure, Result, SlideSummary, Success
from .validators import validate_draft_path, validate_scale

__all__ = [
    # Types
    "Result",
    "Success",
    "Failure",
    "DeckSummary",
    "SlideSummary",
    "ExportResult",
    # Validators
    "validate_draft_path",
    "validate_scale",
    # Console
    "console",
    "print_error",
    "print_warning",
]
