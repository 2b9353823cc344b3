"""Core types for CLI - immutable data structures and Result type."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    """Failed result containing an error message."""

    error: str
    details: dict[str, Any] | None = None

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True


# Result type - either Success[T] or Failure
Result = Union[Success[T], Failure]


@dataclass(frozen=True)
class SlideSummary:
    """One row of the deck overview."""

    number: int
    slide_id: str
    background: str
    element_counts: dict[str, int] = field(default_factory=dict)
    has_background_image: bool = False

    @property
    def total_elements(self) -> int:
        return sum(self.element_counts.values())


@dataclass(frozen=True)
class DeckSummary:
    """Overview of a draft file."""

    path: Path
    slides: tuple[SlideSummary, ...]
    current_index: int
    template_id: str | None = None


@dataclass(frozen=True)
class ExportResult:
    """Result of an export or thumbnail run."""

    paths: tuple[Path, ...]
    page_count: int
    format: str
    duration_seconds: float | None = None
