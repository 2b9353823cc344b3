"""Exceptions raised by the carousel editor.

Structural guards (SlideLimitExceeded, MinimumSlideCount) are raised by the
slide collection and recovered by the editor session as no-ops with a notice.
AssetLoadError and ExportError reach the caller of an export.
"""

from __future__ import annotations


class EditorError(Exception):
    """Base exception for editor errors."""

    pass


class ValidationError(EditorError):
    """Malformed element, slide or template input."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class SlideLimitExceeded(EditorError):
    """Add or duplicate attempted with the collection already full."""

    def __init__(self, limit: int):
        super().__init__(f"A carousel can hold at most {limit} slides")
        self.limit = limit


class MinimumSlideCount(EditorError):
    """Delete attempted on the last remaining slide."""

    def __init__(self, minimum: int):
        super().__init__(f"A carousel needs at least {minimum} slide")
        self.minimum = minimum


class AssetLoadError(EditorError):
    """An image asset could not be fetched or decoded.

    Attributes:
        src: Source string of the asset.
        slide_index: 0-based index of the slide referencing it, when known.
        element_id: Id of the image element referencing it, when known.
        reason: Underlying failure description.
    """

    def __init__(
        self,
        src: str,
        reason: str,
        slide_index: int | None = None,
        element_id: str | None = None,
    ):
        self.src = src
        self.reason = reason
        self.slide_index = slide_index
        self.element_id = element_id
        super().__init__(self._format())

    def _format(self) -> str:
        where = ""
        if self.slide_index is not None:
            where = f" on slide {self.slide_index + 1}"
        if self.element_id:
            where += f" (element {self.element_id})"
        return f"Failed to load image{where}: {_preview(self.src)}: {self.reason}"

    def locate(self, slide_index: int, element_id: str | None = None) -> "AssetLoadError":
        """Return a copy of this error attributed to a slide and element."""
        return AssetLoadError(
            src=self.src,
            reason=self.reason,
            slide_index=slide_index,
            element_id=element_id,
        )


class ExportError(EditorError):
    """Export failed while compositing or assembling the document."""

    def __init__(self, message: str, slide_index: int | None = None):
        super().__init__(message)
        self.slide_index = slide_index


def _preview(src: str, limit: int = 60) -> str:
    """Shorten long sources (data URLs) for messages."""
    if len(src) <= limit:
        return src
    return src[:limit] + "..."
