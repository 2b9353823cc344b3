"""Immutable parameter dataclasses for the export command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ExportParams:
    """Immutable parameters for a carousel export."""

    draft_path: Path
    format: Optional[str]
    quality: Optional[str]
    output: Optional[Path]

    @classmethod
    def from_cli(
        cls,
        draft: str,
        format: Optional[str] = None,
        quality: Optional[str] = None,
        output: Optional[str] = None,
        **kwargs,
    ) -> "ExportParams":
        """Create from CLI arguments, normalizing case."""
        return cls(
            draft_path=Path(draft),
            format=format.lower() if format else None,
            quality=quality.lower() if quality else None,
            output=Path(output) if output else None,
        )
