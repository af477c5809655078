"""
Authored dialogue graph - the editor-time node/edge structure.

An authored graph is what a writer builds in the node editor:

    Entry --> Line("Guard", "Halt!") --> Line("Hero", "Easy...") --> Exit

Nodes expose at most one ``Input`` and one ``Output`` connection point.
Edges always run from an output point to an input point. Line fields can
hold a literal value, a reference to a graph variable, or nothing at all;
the compiler resolves them to plain values.

Usage:
    graph = AuthoredGraph()
    entry = graph.add_node(EntryNode())
    line = graph.add_node(LineNode(actor=Literal("Guard"), text=Literal("Halt!")))
    exit_node = graph.add_node(ExitNode())
    graph.connect(entry, line)
    graph.connect(line, exit_node)
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from dialogue.errors import UnsupportedNodeKind


INPUT_PORT = "Input"
OUTPUT_PORT = "Output"

AUTHORED_EXTENSION = ".dialogue"


# Field bindings


@dataclass(frozen=True)
class Literal:
    """A field value typed directly into the node."""
    value: Any


@dataclass(frozen=True)
class VariableRef:
    """A field wired to a graph variable; resolves to the variable's default."""
    name: str


FieldBinding = Union[Literal, VariableRef, None]


@dataclass
class Variable:
    """A graph-level variable exposed in the editor blackboard."""
    name: str
    default: Any = None


# Node kinds


def _new_node_id() -> str:
    return uuid.uuid4().hex


@dataclass(eq=False)
class EntryNode:
    """Unique starting point. Output only."""
    id: str = field(default_factory=_new_node_id)

    kind = "entry"
    has_input = False
    has_output = True


@dataclass(eq=False)
class ExitNode:
    """End of the dialogue. Input only; callbacks are opaque signal names."""
    id: str = field(default_factory=_new_node_id)
    callbacks: list[str] = field(default_factory=list)

    kind = "exit"
    has_input = True
    has_output = False


@dataclass(eq=False)
class LineNode:
    """
    A single spoken line.

    Attributes:
        actor: Speaker label binding
        audio: Voice clip handle binding
        text: Body text binding
        callbacks: Opaque signal names fired by the game, not the core
    """
    id: str = field(default_factory=_new_node_id)
    actor: FieldBinding = None
    audio: FieldBinding = None
    text: FieldBinding = None
    callbacks: list[str] = field(default_factory=list)

    kind = "line"
    has_input = True
    has_output = True


AuthoredNode = Union[EntryNode, ExitNode, LineNode]

_NODE_TYPES: dict[str, type] = {
    EntryNode.kind: EntryNode,
    ExitNode.kind: ExitNode,
    LineNode.kind: LineNode,
}


@dataclass(frozen=True)
class Edge:
    """Directed connection from ``source``'s output to ``target``'s input."""
    source: str
    target: str


class AuthoredGraph:
    """
    Ordered set of authored nodes, their edges and graph variables.

    Node iteration order is insertion order; the compiler relies on it
    for deterministic ID assignment.
    """

    def __init__(self, name: str = "Dialogue Graph"):
        self.name = name
        self._nodes: dict[str, Any] = {}
        self._edges: list[Edge] = []
        self.variables: dict[str, Variable] = {}

    def __iter__(self) -> Iterator[Any]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def nodes(self) -> list[Any]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges)

    def add_node(self, node: Any) -> Any:
        """Add a node and return it."""
        if node.id in self._nodes:
            raise ValueError(f"Duplicate node id: {node.id}")
        self._nodes[node.id] = node
        return node

    def get_node(self, node_id: str) -> Optional[Any]:
        return self._nodes.get(node_id)

    def remove_node(self, node: Any) -> None:
        """Remove a node together with every edge touching it."""
        self._nodes.pop(node.id, None)
        self._edges = [
            e for e in self._edges
            if e.source != node.id and e.target != node.id
        ]

    def connect(self, source: Any, target: Any) -> Edge:
        """
        Wire ``source``'s output point to ``target``'s input point.

        Fan-in/fan-out is *not* checked here; the editor lets authors make
        any connection and the validator reports the result.
        """
        if not source.has_output:
            raise ValueError(f"{type(source).__name__} has no {OUTPUT_PORT} point")
        if not target.has_input:
            raise ValueError(f"{type(target).__name__} has no {INPUT_PORT} point")
        for node in (source, target):
            if node.id not in self._nodes:
                raise ValueError(f"Node {node.id} is not part of this graph")

        edge = Edge(source.id, target.id)
        self._edges.append(edge)
        return edge

    def disconnect(self, source: Any, target: Any) -> None:
        self._edges = [
            e for e in self._edges
            if not (e.source == source.id and e.target == target.id)
        ]

    def input_connections(self, node: Any) -> list[Any]:
        """Peers connected to the node's input point (empty if it has none)."""
        if not node.has_input:
            return []
        return [self._nodes[e.source] for e in self._edges if e.target == node.id]

    def output_connections(self, node: Any) -> list[Any]:
        """Peers connected to the node's output point (empty if it has none)."""
        if not node.has_output:
            return []
        return [self._nodes[e.target] for e in self._edges if e.source == node.id]

    def first_output(self, node: Any) -> Optional[Any]:
        connections = self.output_connections(node)
        return connections[0] if connections else None

    def set_variable(self, name: str, default: Any) -> Variable:
        variable = Variable(name, default)
        self.variables[name] = variable
        return variable

    def nodes_of_kind(self, node_type: type) -> list[Any]:
        return [n for n in self._nodes.values() if isinstance(n, node_type)]

    # Document form

    def to_dict(self) -> dict[str, Any]:
        """Convert to the editor's JSON document."""
        return {
            "name": self.name,
            "variables": {
                name: var.default for name, var in self.variables.items()
            },
            "nodes": [_node_to_dict(node) for node in self._nodes.values()],
            "edges": [
                {"source": e.source, "target": e.target} for e in self._edges
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuthoredGraph:
        """Rebuild a graph from its JSON document."""
        graph = cls(name=data.get("name", "Dialogue Graph"))

        for name, default in data.get("variables", {}).items():
            graph.set_variable(name, default)

        for node_data in data.get("nodes", []):
            graph.add_node(_node_from_dict(node_data))

        for edge_data in data.get("edges", []):
            source = graph.get_node(edge_data["source"])
            target = graph.get_node(edge_data["target"])
            if source is None or target is None:
                raise ValueError(
                    f"Edge references unknown node: {edge_data['source']} -> {edge_data['target']}"
                )
            graph.connect(source, target)

        return graph


def _binding_to_dict(binding: FieldBinding) -> Optional[dict[str, Any]]:
    if isinstance(binding, Literal):
        return {"value": binding.value}
    if isinstance(binding, VariableRef):
        return {"variable": binding.name}
    return None


def _binding_from_dict(data: Optional[dict[str, Any]]) -> FieldBinding:
    if data is None:
        return None
    if "variable" in data:
        return VariableRef(data["variable"])
    return Literal(data.get("value"))


def _node_to_dict(node: Any) -> dict[str, Any]:
    data: dict[str, Any] = {"id": node.id, "kind": node.kind}
    if isinstance(node, LineNode):
        data["actor"] = _binding_to_dict(node.actor)
        data["audio"] = _binding_to_dict(node.audio)
        data["text"] = _binding_to_dict(node.text)
    if isinstance(node, (LineNode, ExitNode)) and node.callbacks:
        data["callbacks"] = list(node.callbacks)
    return data


def _node_from_dict(data: dict[str, Any]) -> Any:
    kind = data.get("kind", "")
    node_type = _NODE_TYPES.get(kind)
    if node_type is None:
        raise UnsupportedNodeKind(kind or "<missing kind>")

    if node_type is LineNode:
        return LineNode(
            id=data["id"],
            actor=_binding_from_dict(data.get("actor")),
            audio=_binding_from_dict(data.get("audio")),
            text=_binding_from_dict(data.get("text")),
            callbacks=list(data.get("callbacks", [])),
        )
    if node_type is ExitNode:
        return ExitNode(id=data["id"], callbacks=list(data.get("callbacks", [])))
    return EntryNode(id=data["id"])


def load_authored_graph(path: str | Path) -> AuthoredGraph:
    """Load an authored graph document (``.dialogue`` JSON)."""
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    graph = AuthoredGraph.from_dict(data)
    if "name" not in data:
        graph.name = path.stem
    return graph


def save_authored_graph(graph: AuthoredGraph, path: str | Path) -> None:
    """Save an authored graph document."""
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(graph.to_dict(), f, indent=2)
