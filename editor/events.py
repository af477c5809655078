"""
Editor-specific events.

Events for dialogue authoring operations: validation on every graph
change and the import step that produces runtime assets.
"""

from __future__ import annotations

from enum import Enum, auto


class EditorEvent(Enum):
    """Editor-specific events."""

    # Authoring
    GRAPH_VALIDATED = auto()

    # Import
    GRAPH_IMPORTED = auto()
    IMPORT_FAILED = auto()
