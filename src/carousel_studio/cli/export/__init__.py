"""Export command."""

from .commands import export

__all__ = ["export"]
