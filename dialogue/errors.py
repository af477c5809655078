"""
Dialogue exceptions.

Validation problems are *not* exceptions: the validator returns them as
GraphIssue records. The exceptions here are raised when an operation
cannot continue.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dialogue.validator import GraphIssue


class DialogueError(Exception):
    """Base class for all dialogue errors."""


class UnsupportedNodeKind(DialogueError):
    """
    A node kind has no lowering rule (compiler) or no executor (interpreter).

    Signals a version mismatch between authoring data, compiler and
    interpreter. Never swallowed.
    """

    def __init__(self, kind: str):
        super().__init__(f"{kind} is not supported.")
        self.kind = kind


class ReentrantAdvance(DialogueError):
    """advance() was called while another advance() was still executing."""


class RuntimeGraphFormatError(DialogueError):
    """A persisted runtime graph could not be parsed or failed its schema."""


class GraphValidationFailed(DialogueError):
    """Raised by the importer when an authored graph has structural issues."""

    def __init__(self, name: str, issues: list[GraphIssue]):
        super().__init__(f"[{name}] graph has {len(issues)} validation issue(s)")
        self.name = name
        self.issues = issues


class DialogueCycleError(DialogueError):
    """
    Compilation would produce records whose successors loop.

    A loop the entry can reach never passes validation; a detached loop
    of lines does, and is caught at compile time.
    """

    def __init__(self, name: str, cycle: list[int]):
        path = " -> ".join(str(node_id) for node_id in cycle + cycle[:1])
        super().__init__(f"'{name}' compiles to a cycle: {path}")
        self.name = name
        self.cycle = cycle
