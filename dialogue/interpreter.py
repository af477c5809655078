"""
Dialogue interpreter - walks a runtime graph one record per advance.

The interpreter owns an ID -> record table and a single cursor. It has no
timers and no input bindings: something outside calls advance() once per
"continue" press.

Usage:
    interpreter = DialogueInterpreter(on_line=show_line, on_end=close_box)
    interpreter.load(runtime_graph)
    interpreter.advance()  # executes the first line
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from dialogue.errors import ReentrantAdvance, UnsupportedNodeKind
from dialogue.runtime import NONE, DialogueNode, RuntimeGraph, RuntimeNode


class InterpreterState(Enum):
    """Lifecycle of an interpreter."""
    UNLOADED = auto()
    LOADED = auto()
    ACTIVE = auto()
    TERMINATED = auto()


@dataclass(frozen=True)
class PlaybackRequest:
    """
    Effect emitted when a line executes.

    The receiver renders the text and plays the audio; the interpreter
    does not wait for either.
    """
    actor: str
    text: str
    audio: Optional[str] = None
    node_id: int = NONE
    callbacks: tuple[str, ...] = ()


LineCallback = Callable[[PlaybackRequest], None]
EndCallback = Callable[[], None]


class DialogueInterpreter:
    """
    Single-cursor state machine over a runtime graph.

    States:
        UNLOADED   - nothing loaded yet
        LOADED     - graph loaded, cursor at entry, nothing executed
        ACTIVE     - at least one record executed, more may follow
        TERMINATED - cursor is NONE or points at an unknown ID
    """

    def __init__(
        self,
        on_line: Optional[LineCallback] = None,
        on_end: Optional[EndCallback] = None,
        log_lines: bool = True,
    ):
        self.on_line = on_line
        self.on_end = on_end
        self.log_lines = log_lines

        self._table: dict[int, RuntimeNode] = {}
        self._cursor: int = NONE
        self._state = InterpreterState.UNLOADED
        self._advancing = False

        # Record type -> executor
        self._executors: dict[type[RuntimeNode], Callable[[RuntimeNode], None]] = {
            DialogueNode: self._execute_dialogue,
        }

        self.logger = logging.getLogger(__name__)

    @property
    def state(self) -> InterpreterState:
        return self._state

    @property
    def cursor(self) -> int:
        """ID of the next record to execute, or NONE."""
        return self._cursor

    @property
    def current_node(self) -> Optional[RuntimeNode]:
        return self._table.get(self._cursor)

    @property
    def is_terminated(self) -> bool:
        return self._state == InterpreterState.TERMINATED

    def load(self, graph: RuntimeGraph) -> None:
        """
        Load a runtime graph and rewind to its entry.

        Any traversal in progress is abandoned.
        """
        self._table.clear()
        for record in graph.records:
            if record.id in self._table:
                self.logger.warning(f"Duplicate record id {record.id}; keeping the last one")
            self._table[record.id] = record

        self._cursor = graph.entry_id
        self._state = InterpreterState.LOADED

    def unload(self) -> None:
        """Drop the loaded graph."""
        self._table.clear()
        self._cursor = NONE
        self._state = InterpreterState.UNLOADED

    def advance(self) -> bool:
        """
        Execute the record under the cursor and move to its successor.

        Returns:
            True if a record executed, False if the dialogue is over

        Raises:
            UnsupportedNodeKind: The record's kind has no executor; the
                cursor is left where it was
            ReentrantAdvance: Called from inside a callback of this advance
        """
        if self._advancing:
            raise ReentrantAdvance("advance() called while already advancing")

        self._advancing = True
        try:
            record = self._table.get(self._cursor)
            if record is None:
                self._terminate()
                return False

            executor = self._executors.get(type(record))
            if executor is None:
                raise UnsupportedNodeKind(type(record).__name__)

            executor(record)
            self._cursor = record.successor_id
            self._state = InterpreterState.ACTIVE
            return True
        finally:
            self._advancing = False

    def _terminate(self) -> None:
        self._state = InterpreterState.TERMINATED
        self.logger.info("END DIALOGUE")
        if self.on_end:
            self.on_end()

    # Executors

    def _execute_dialogue(self, node: DialogueNode) -> None:
        if self.log_lines:
            self.logger.info(f"{node.actor}: {node.text}")

        if self.on_line:
            self.on_line(PlaybackRequest(
                actor=node.actor,
                text=node.text,
                audio=node.audio,
                node_id=node.id,
                callbacks=node.callbacks,
            ))
