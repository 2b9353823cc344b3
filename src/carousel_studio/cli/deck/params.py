"""Immutable parameter dataclasses for deck commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from carousel_studio.constants import THUMBNAIL_SCALE


@dataclass(frozen=True)
class DeckInfoParams:
    """Parameters for showing a draft."""

    draft_path: Path

    @classmethod
    def from_cli(cls, draft: str, **kwargs) -> "DeckInfoParams":
        return cls(draft_path=Path(draft))


@dataclass(frozen=True)
class NewDeckParams:
    """Parameters for creating a draft."""

    draft_path: Path
    template_id: Optional[str]
    force: bool

    @classmethod
    def from_cli(
        cls,
        draft: str,
        template: Optional[str] = None,
        force: bool = False,
        **kwargs,
    ) -> "NewDeckParams":
        return cls(
            draft_path=Path(draft),
            template_id=template.strip() if template else None,
            force=force,
        )


@dataclass(frozen=True)
class ThumbnailParams:
    """Parameters for rendering thumbnails."""

    draft_path: Path
    output_dir: Path
    scale: float

    @classmethod
    def from_cli(
        cls,
        draft: str,
        output_dir: str,
        scale: Optional[float] = None,
        **kwargs,
    ) -> "ThumbnailParams":
        return cls(
            draft_path=Path(draft),
            output_dir=Path(output_dir),
            scale=scale if scale is not None else THUMBNAIL_SCALE,
        )
