"""
Runtime dialogue graph - the compiled, persisted artifact.

A runtime graph is an entry ID plus a flat list of records. Records point
at each other by integer ID only; Entry and Exit nodes are compiled away.

Records are Pydantic models, so they are immutable, validated on
construction and trivially serializable. Each record kind registers
itself by its ``kind`` tag, which is how persisted records find their
class again:

    @register_node_kind
    class DialogueNode(RuntimeNode):
        kind: Literal["dialogue"] = "dialogue"
        ...

Persisted form:

    {
      "entry_id": 1,
      "records": [
        {"id": 1, "successor_id": 2, "kind": "dialogue", "actor": "Guard", ...},
        {"id": 2, "successor_id": -1, "kind": "dialogue", "actor": "Hero", ...}
      ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal, Optional

import jsonschema
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as ModelValidationError

from dialogue.errors import RuntimeGraphFormatError, UnsupportedNodeKind


# Sentinel for "no node": empty dialogue entry, or a line wired to Exit
NONE = -1

INT32_MAX = 2**31 - 1

RUNTIME_EXTENSION = ".json"


class RuntimeNode(BaseModel):
    """
    Base class for all runtime records.

    Attributes:
        id: Record ID assigned by the compiler
        successor_id: ID of the next record, or NONE
        kind: Kind tag used for persistence and dispatch
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    id: int = Field(ge=0, le=INT32_MAX)
    successor_id: int = Field(default=NONE, ge=NONE, le=INT32_MAX)
    kind: str


# Registry of record kinds for deserialization
_node_registry: dict[str, type[RuntimeNode]] = {}


def register_node_kind(cls: type[RuntimeNode]) -> type[RuntimeNode]:
    """Decorator registering a record class under its ``kind`` default."""
    tag = cls.model_fields["kind"].default
    if not isinstance(tag, str) or not tag:
        raise TypeError(f"{cls.__name__} must declare a default kind tag")
    _node_registry[tag] = cls
    return cls


def get_node_kind(tag: str) -> type[RuntimeNode] | None:
    """Get a record class by kind tag."""
    return _node_registry.get(tag)


@register_node_kind
class DialogueNode(RuntimeNode):
    """
    A spoken line.

    Attributes:
        actor: Speaker label shown above the text
        audio: Voice clip handle, or None for silent lines
        text: Body text
        callbacks: Opaque signal names, passed through to the game
    """
    kind: Literal["dialogue"] = "dialogue"
    actor: str = ""
    audio: Optional[str] = None
    text: str = ""
    callbacks: tuple[str, ...] = ()


class RuntimeGraph(BaseModel):
    """Compiled dialogue: where to start and every record by ID."""

    model_config = ConfigDict(frozen=True, extra='forbid')

    entry_id: int = Field(default=NONE, ge=NONE, le=INT32_MAX)
    records: tuple[RuntimeNode, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.entry_id == NONE

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON document."""
        return {
            "entry_id": self.entry_id,
            # Dump each record with its own class so kind fields survive
            "records": [record.model_dump(mode="json") for record in self.records],
        }

    @classmethod
    def from_dict(cls, data: Any) -> RuntimeGraph:
        """
        Rebuild a runtime graph from its persisted document.

        Raises:
            RuntimeGraphFormatError: Document fails the schema or a record
                fails model validation
            UnsupportedNodeKind: A record carries an unregistered kind tag
        """
        try:
            jsonschema.validate(instance=data, schema=RUNTIME_GRAPH_SCHEMA)
        except jsonschema.ValidationError as e:
            raise RuntimeGraphFormatError(e.message) from e

        records = []
        for record_data in data["records"]:
            node_cls = get_node_kind(record_data["kind"])
            if node_cls is None:
                raise UnsupportedNodeKind(record_data["kind"])
            try:
                records.append(node_cls.model_validate(record_data))
            except ModelValidationError as e:
                raise RuntimeGraphFormatError(str(e)) from e

        return cls(entry_id=data["entry_id"], records=tuple(records))


RUNTIME_GRAPH_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Runtime dialogue graph",
    "type": "object",
    "required": ["entry_id", "records"],
    "additionalProperties": False,
    "properties": {
        "entry_id": {"type": "integer", "minimum": NONE, "maximum": INT32_MAX},
        "records": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "successor_id", "kind"],
                "properties": {
                    "id": {"type": "integer", "minimum": 0, "maximum": INT32_MAX},
                    "successor_id": {"type": "integer", "minimum": NONE, "maximum": INT32_MAX},
                    "kind": {"type": "string", "minLength": 1},
                },
            },
        },
    },
}


def serialize(graph: RuntimeGraph) -> str:
    """Serialize a runtime graph to JSON text."""
    return json.dumps(graph.to_dict(), indent=2)


def deserialize(text: str) -> RuntimeGraph:
    """Parse JSON text produced by serialize()."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RuntimeGraphFormatError(f"Invalid JSON: {e}") from e
    return RuntimeGraph.from_dict(data)


def save_runtime_graph(graph: RuntimeGraph, path: str | Path) -> None:
    """Write a runtime graph to disk."""
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(serialize(graph))


def load_runtime_graph(path: str | Path) -> RuntimeGraph:
    """Read a runtime graph from disk."""
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        return deserialize(f.read())
