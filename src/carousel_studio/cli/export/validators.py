"""Export-specific validators."""

from __future__ import annotations

from carousel_studio.constants import ExportFormat, ExportQuality

from ..core.types import Failure, Result, Success
from ..core.validators import validate_draft_path
from .params import ExportParams

VALID_FORMATS: list[str] = [f.value for f in ExportFormat]
VALID_QUALITIES: list[str] = [q.value for q in ExportQuality]


def validate_export_params(params: ExportParams) -> Result[ExportParams]:
    """Validate export parameters.

    Returns Result with params if valid, or Failure with error.
    """
    path_result = validate_draft_path(params.draft_path)
    if isinstance(path_result, Failure):
        return path_result

    if params.format and params.format not in VALID_FORMATS:
        return Failure(f"Invalid format: {params.format}", {"valid_formats": VALID_FORMATS})

    if params.quality and params.quality not in VALID_QUALITIES:
        return Failure(f"Invalid quality: {params.quality}", {"valid_qualities": VALID_QUALITIES})

    if params.format == ExportFormat.PNG.value and params.output and params.output.is_file():
        return Failure(
            f"PNG export needs a directory, got a file: {params.output}",
            {"hint": "Pass a directory with --output"},
        )

    return Success(params)
