"""
Dialogue module - authored graphs, compilation and playback.

Provides:
- Authored graph model (Entry -> lines -> Exit)
- Structural validation
- Compilation to an ID-indexed runtime graph
- Runtime graph persistence
- Single-cursor interpreter and its engine integration
"""

from dialogue.errors import (
    DialogueError,
    UnsupportedNodeKind,
    ReentrantAdvance,
    RuntimeGraphFormatError,
    GraphValidationFailed,
    DialogueCycleError,
)
from dialogue.graph import (
    AuthoredGraph,
    EntryNode,
    ExitNode,
    LineNode,
    Literal,
    VariableRef,
    Variable,
    load_authored_graph,
    save_authored_graph,
)
from dialogue.validator import GraphIssue, Invariant, validate, format_issue
from dialogue.compiler import compile_graph
from dialogue.runtime import (
    NONE,
    RuntimeNode,
    DialogueNode,
    RuntimeGraph,
    register_node_kind,
    serialize,
    deserialize,
    save_runtime_graph,
    load_runtime_graph,
)
from dialogue.interpreter import DialogueInterpreter, InterpreterState, PlaybackRequest
from dialogue.config import DialogueConfig
from dialogue.system import DialogueSystem

__all__ = [
    # Errors
    "DialogueError",
    "UnsupportedNodeKind",
    "ReentrantAdvance",
    "RuntimeGraphFormatError",
    "GraphValidationFailed",
    "DialogueCycleError",
    # Authoring
    "AuthoredGraph",
    "EntryNode",
    "ExitNode",
    "LineNode",
    "Literal",
    "VariableRef",
    "Variable",
    "load_authored_graph",
    "save_authored_graph",
    # Validation / compilation
    "GraphIssue",
    "Invariant",
    "validate",
    "format_issue",
    "compile_graph",
    # Runtime
    "NONE",
    "RuntimeNode",
    "DialogueNode",
    "RuntimeGraph",
    "register_node_kind",
    "serialize",
    "deserialize",
    "save_runtime_graph",
    "load_runtime_graph",
    "DialogueInterpreter",
    "InterpreterState",
    "PlaybackRequest",
    "DialogueConfig",
    "DialogueSystem",
]
