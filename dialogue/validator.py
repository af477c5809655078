"""Structural validation of authored dialogue graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from dialogue.graph import (
    INPUT_PORT,
    OUTPUT_PORT,
    AuthoredGraph,
    EntryNode,
    ExitNode,
)


class Invariant(Enum):
    """Structural rules a graph must satisfy before it can be compiled."""
    SINGLE_CONNECTION = "single_connection"
    ENTRY_EXIT_CARDINALITY = "entry_exit_cardinality"


@dataclass(frozen=True)
class GraphIssue:
    """
    A single validation finding.

    Attributes:
        invariant: The rule that was violated
        message: Human-readable description
        node_id: Offending node, if the issue is tied to one
        port: Offending connection point name, if any
        context: Extra values (counts) for tooling
    """
    invariant: Invariant
    message: str
    node_id: Optional[str] = None
    port: Optional[str] = None
    context: dict[str, int] = field(default_factory=dict)


def format_issue(issue: GraphIssue) -> str:
    parts = [f"{issue.invariant.value}: {issue.message}"]
    if issue.node_id is not None:
        parts.append(f"node={issue.node_id}")
    if issue.port is not None:
        parts.append(f"port={issue.port}")
    return " ".join(parts)


def validate(graph: AuthoredGraph) -> list[GraphIssue]:
    """
    Check a graph against every structural invariant.

    All checks run; issues are returned together so an author sees the
    whole problem at once. The graph is not modified.

    Returns:
        List of issues, empty when the graph can be compiled
    """
    issues: list[GraphIssue] = []
    issues.extend(_check_connections(graph))
    issues.extend(_check_cardinality(graph))
    return issues


def is_valid(graph: AuthoredGraph) -> bool:
    return not validate(graph)


def _check_connections(graph: AuthoredGraph) -> list[GraphIssue]:
    issues = []
    for node in graph:
        incoming = len(graph.input_connections(node))
        outgoing = len(graph.output_connections(node))

        if incoming > 1:
            issues.append(GraphIssue(
                invariant=Invariant.SINGLE_CONNECTION,
                message="Node has more than one incoming connection.",
                node_id=node.id,
                port=INPUT_PORT,
                context={"connections": incoming},
            ))
        if outgoing > 1:
            issues.append(GraphIssue(
                invariant=Invariant.SINGLE_CONNECTION,
                message="Node has more than one outgoing connection.",
                node_id=node.id,
                port=OUTPUT_PORT,
                context={"connections": outgoing},
            ))
    return issues


def _check_cardinality(graph: AuthoredGraph) -> list[GraphIssue]:
    issues = []
    for node_type, label in ((EntryNode, "entry"), (ExitNode, "exit")):
        count = len(graph.nodes_of_kind(node_type))
        if count != 1:
            issues.append(GraphIssue(
                invariant=Invariant.ENTRY_EXIT_CARDINALITY,
                message=f"Graph must contain exactly one {label} node, found {count}.",
                context={label: count},
            ))
    return issues
