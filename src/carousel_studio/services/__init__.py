"""Services: draft storage and export progress tracking."""

from .progress import ExportProgress, ProgressCallback, ProgressTracker
from .storage import Draft, DraftStore

__all__ = [
    "Draft",
    "DraftStore",
    "ExportProgress",
    "ProgressCallback",
    "ProgressTracker",
]
