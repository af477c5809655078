"""
Dialogue compiler - lowers an authored graph into a runtime graph.

Steps:
1. Number every authored node in iteration order (Entry and Exit too).
2. Follow the Entry node's output to find the first line.
3. Lower every line node into a runtime record whose successor is the
   ID of the node wired to its output (NONE when that is the Exit).
4. Refuse the result if any successor chain loops.

The graph is expected to have passed dialogue.validator.validate();
nothing here re-checks fan-in/fan-out.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from dialogue.errors import DialogueCycleError, UnsupportedNodeKind
from dialogue.graph import (
    AuthoredGraph,
    EntryNode,
    ExitNode,
    FieldBinding,
    LineNode,
    Literal,
    VariableRef,
)
from dialogue.runtime import NONE, DialogueNode, RuntimeGraph, RuntimeNode

logger = logging.getLogger(__name__)


def compile_graph(graph: AuthoredGraph) -> RuntimeGraph:
    """
    Compile an authored graph.

    Args:
        graph: A graph that passed validation

    Returns:
        The immutable runtime graph

    Raises:
        UnsupportedNodeKind: A node kind has no lowering rule
        DialogueCycleError: The successor chain loops back on itself
    """
    node_ids = assign_ids(graph)
    entry_id = resolve_entry(graph, node_ids)

    records: list[RuntimeNode] = []
    for node in graph:
        if isinstance(node, (EntryNode, ExitNode)):
            continue
        successor_id = _resolve_target(graph.first_output(node), node_ids)
        records.append(lower_node(graph, node, node_ids[node.id], successor_id))

    cycle = find_cycle(records)
    if cycle:
        logger.error(f"'{graph.name}': successor chain loops through node {cycle[0]}")
        raise DialogueCycleError(graph.name, cycle)

    logger.debug(
        f"Compiled '{graph.name}': {len(records)} records, entry {entry_id}"
    )
    return RuntimeGraph(entry_id=entry_id, records=tuple(records))


def find_cycle(records: list[RuntimeNode]) -> list[int]:
    """
    Find a loop in the successor chains of compiled records.

    Every record has at most one successor, so each chain is walked once.

    Returns:
        IDs of the first loop found, in successor order; empty if none
    """
    successors = {record.id: record.successor_id for record in records}
    finished: set[int] = set()

    for start in successors:
        path: list[int] = []
        on_path: dict[int, int] = {}
        node_id = start
        while node_id in successors and node_id not in finished:
            if node_id in on_path:
                return path[on_path[node_id]:]
            on_path[node_id] = len(path)
            path.append(node_id)
            node_id = successors[node_id]
        finished.update(path)

    return []


def assign_ids(graph: AuthoredGraph) -> dict[str, int]:
    """Map each authored node id to a consecutive integer, in iteration order."""
    return {node.id: index for index, node in enumerate(graph)}


def resolve_entry(graph: AuthoredGraph, node_ids: dict[str, int]) -> int:
    """ID of the node wired to the Entry's output, or NONE."""
    entries = graph.nodes_of_kind(EntryNode)
    if not entries:
        return NONE
    return _resolve_target(graph.first_output(entries[0]), node_ids)


def lower_node(
    graph: AuthoredGraph,
    node: Any,
    node_id: int,
    successor_id: int,
) -> RuntimeNode:
    """Build the runtime record for one content node."""
    if isinstance(node, LineNode):
        return DialogueNode(
            id=node_id,
            successor_id=successor_id,
            actor=resolve_field(graph, node.actor, str, ""),
            audio=resolve_field(graph, node.audio, str, None),
            text=resolve_field(graph, node.text, str, ""),
            callbacks=tuple(node.callbacks),
        )

    raise UnsupportedNodeKind(type(node).__name__)


def resolve_field(
    graph: AuthoredGraph,
    binding: FieldBinding,
    expected: type,
    zero: Any,
) -> Any:
    """
    Resolve a field binding to a plain value.

    Variable references resolve to the variable's default. Unbound fields,
    missing variables and mistyped values all resolve to ``zero``.
    """
    if isinstance(binding, Literal):
        value = binding.value
    elif isinstance(binding, VariableRef):
        variable = graph.variables.get(binding.name)
        if variable is None:
            logger.warning(f"'{graph.name}': unknown variable '{binding.name}', using empty value")
            return zero
        value = variable.default
    else:
        return zero

    if value is None or not isinstance(value, expected):
        return zero
    return value


def _resolve_target(target: Optional[Any], node_ids: dict[str, int]) -> int:
    if target is None or isinstance(target, ExitNode):
        return NONE
    return node_ids[target.id]
