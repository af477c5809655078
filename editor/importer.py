"""
Dialogue importer - turns authored ``.dialogue`` documents into runtime assets.

Two entry points mirror the editor workflow:
- on_graph_changed(): run after every edit; logs issues, never raises
- import_graph() / import_asset(): compile for the game; refuses invalid graphs
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dialogue.compiler import compile_graph
from dialogue.errors import GraphValidationFailed
from dialogue.graph import AuthoredGraph, load_authored_graph
from dialogue.runtime import RUNTIME_EXTENSION, RuntimeGraph, save_runtime_graph
from dialogue.validator import GraphIssue, format_issue, validate
from editor.events import EditorEvent
from engine.core.events import EventBus


class DialogueImporter:
    """
    Validates and compiles authored dialogue graphs.

    Usage:
        importer = DialogueImporter(event_bus)
        importer.on_graph_changed(graph)            # while editing
        runtime = importer.import_graph(graph)      # on save / import
        importer.import_asset("dialogue/intro.dialogue")
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self.event_bus = event_bus
        self.logger = logging.getLogger(__name__)

    def on_graph_changed(self, graph: AuthoredGraph, name: Optional[str] = None) -> list[GraphIssue]:
        """
        Validate a graph after an edit and report every issue.

        Returns:
            The issues found (empty when the graph is importable)
        """
        name = name or graph.name
        issues = validate(graph)
        for issue in issues:
            self.logger.error(f"[{name}] {format_issue(issue)}")

        if self.event_bus:
            self.event_bus.publish(EditorEvent.GRAPH_VALIDATED, name=name, issues=issues)
        return issues

    def import_graph(self, graph: AuthoredGraph, name: Optional[str] = None) -> RuntimeGraph:
        """
        Compile a graph, refusing it if validation finds anything.

        Raises:
            GraphValidationFailed: The graph violates a structural invariant
            UnsupportedNodeKind: A node kind cannot be compiled
            DialogueCycleError: Lines are wired into a loop
        """
        name = name or graph.name
        issues = self.on_graph_changed(graph, name)
        if issues:
            if self.event_bus:
                self.event_bus.publish(EditorEvent.IMPORT_FAILED, name=name, issues=issues)
            raise GraphValidationFailed(name, issues)

        runtime_graph = compile_graph(graph)

        if self.event_bus:
            self.event_bus.publish(EditorEvent.GRAPH_IMPORTED, name=name, graph=runtime_graph)
        return runtime_graph

    def import_asset(self, input_path: str | Path, output_path: Optional[str | Path] = None) -> Path:
        """
        Import an authored document from disk and write the runtime asset.

        Args:
            input_path: Path to the ``.dialogue`` document
            output_path: Destination (default: same name with ``.json``)

        Returns:
            Path of the written runtime asset
        """
        input_path = Path(input_path)
        output_path = Path(output_path) if output_path else input_path.with_suffix(RUNTIME_EXTENSION)

        graph = load_authored_graph(input_path)
        runtime_graph = self.import_graph(graph, input_path.stem)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        save_runtime_graph(runtime_graph, output_path)
        self.logger.info(f"Imported {input_path} -> {output_path}")
        return output_path


def compile_dialogue_file(input_path: str | Path, output_path: Optional[str | Path] = None) -> Path:
    """
    Compile a ``.dialogue`` document to a runtime JSON asset.

    Args:
        input_path: Path to .dialogue file
        output_path: Path to output .json file (default: same name with .json)
    """
    return DialogueImporter().import_asset(input_path, output_path)
