"""Editor: selection and transform engine, undo history and the editing session."""

from .history import EditorHistory, HistoryEntry
from .session import EditorSession, Notice
from .transform import GestureState, TransformEngine, bake_transform, round_px

__all__ = [
    "EditorSession",
    "Notice",
    "TransformEngine",
    "GestureState",
    "bake_transform",
    "round_px",
    "EditorHistory",
    "HistoryEntry",
]
