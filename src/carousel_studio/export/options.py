"""Export options."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from ..constants import (
    EXPORT_FILE_PREFIX,
    QUALITY_PIXEL_RATIOS,
    ExportFormat,
    ExportQuality,
)


def generate_filename(
    prefix: str = EXPORT_FILE_PREFIX,
    extension: str = "pdf",
    on: date | None = None,
) -> str:
    """Dated export file name, e.g. ``carousel-2024-03-01.pdf``."""
    on = on or date.today()
    return f"{prefix}-{on.isoformat()}.{extension}"


class ExportOptions(BaseModel):
    """How a carousel is exported."""

    format: ExportFormat = ExportFormat.PDF
    quality: ExportQuality = ExportQuality.HIGH
    file_name: str | None = None
    file_prefix: str = EXPORT_FILE_PREFIX

    @property
    def pixel_ratio(self) -> int:
        """Output pixels per canvas pixel."""
        return QUALITY_PIXEL_RATIOS[self.quality]

    def get_file_name(self, on: date | None = None) -> str:
        """File name for the export, generated when not set."""
        if self.file_name:
            return self.file_name
        return generate_filename(self.file_prefix, self.format.value, on)
