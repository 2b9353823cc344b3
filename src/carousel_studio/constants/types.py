"""Type definitions for the carousel editor.

- Type aliases for JSON payloads and element patches
"""

from typing import Any, TypeAlias

JSON: TypeAlias = dict[str, Any]
"""Generic JSON object type."""

ElementPatch: TypeAlias = dict[str, Any]
"""Partial element update, keyed by field name or serialized alias."""
