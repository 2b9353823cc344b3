"""Deck-specific validators."""

from __future__ import annotations

from carousel_studio.slides import get_template, list_templates

from ..core.types import Failure, Result, Success
from ..core.validators import validate_draft_path, validate_scale
from .params import DeckInfoParams, NewDeckParams, ThumbnailParams


def validate_info_params(params: DeckInfoParams) -> Result[DeckInfoParams]:
    path_result = validate_draft_path(params.draft_path)
    if isinstance(path_result, Failure):
        return path_result
    return Success(params)


def validate_new_params(params: NewDeckParams) -> Result[NewDeckParams]:
    """Validate draft creation parameters.

    Returns Result with params if valid, or Failure with error.
    """
    if params.draft_path.exists() and not params.force:
        return Failure(
            f"Draft already exists: {params.draft_path}",
            {"hint": "Use --force to overwrite"},
        )

    if params.template_id and get_template(params.template_id) is None:
        return Failure(
            f"Unknown template: {params.template_id}",
            {"available": ", ".join(t.id for t in list_templates())},
        )

    return Success(params)


def validate_thumbnail_params(params: ThumbnailParams) -> Result[ThumbnailParams]:
    path_result = validate_draft_path(params.draft_path)
    if isinstance(path_result, Failure):
        return path_result

    scale_result = validate_scale(params.scale)
    if isinstance(scale_result, Failure):
        return scale_result

    if params.output_dir.exists() and not params.output_dir.is_dir():
        return Failure(f"Output is not a directory: {params.output_dir}")

    return Success(params)
