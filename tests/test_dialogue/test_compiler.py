import logging
from dataclasses import dataclass, field

import pytest

from dialogue.compiler import assign_ids, compile_graph, find_cycle, resolve_field
from dialogue.errors import DialogueCycleError, UnsupportedNodeKind
from dialogue.graph import AuthoredGraph, EntryNode, ExitNode, LineNode, Literal, VariableRef
from dialogue.runtime import NONE, DialogueNode


@dataclass(eq=False)
class ChoiceNode:
    """A node kind the compiler has no rule for."""
    id: str = "choice"
    options: list[str] = field(default_factory=list)

    kind = "choice"
    has_input = True
    has_output = True


def test_linear_graph(linear_graph):
    graph, entry, a, b, exit_node = linear_graph
    ids = assign_ids(graph)

    runtime = compile_graph(graph)

    assert ids == {"entry": 0, "a": 1, "b": 2, "exit": 3}
    assert runtime.entry_id == ids["a"]
    assert runtime.records == (
        DialogueNode(id=1, successor_id=2, actor="Guard", text="Halt!"),
        DialogueNode(id=2, successor_id=NONE, actor="Hero", audio="hero_01.ogg", text="Easy there."),
    )

def test_entry_and_exit_are_not_materialized(linear_graph):
    graph, *_ = linear_graph
    runtime = compile_graph(graph)
    assert {r.id for r in runtime.records} == {1, 2}

def test_entry_without_edge():
    graph = AuthoredGraph()
    graph.add_node(EntryNode())
    graph.add_node(ExitNode())

    runtime = compile_graph(graph)

    assert runtime.entry_id == NONE
    assert runtime.records == ()
    assert runtime.is_empty

def test_entry_wired_to_exit():
    graph = AuthoredGraph()
    entry = graph.add_node(EntryNode())
    exit_node = graph.add_node(ExitNode())
    graph.connect(entry, exit_node)

    assert compile_graph(graph).entry_id == NONE

def test_line_without_output_ends_dialogue():
    graph = AuthoredGraph()
    entry = graph.add_node(EntryNode())
    line = graph.add_node(LineNode(text=Literal("Alone.")))
    graph.add_node(ExitNode())
    graph.connect(entry, line)

    runtime = compile_graph(graph)

    assert runtime.entry_id == 1
    assert runtime.records[0].successor_id == NONE

def test_records_follow_enumeration_order():
    # Chain order differs from insertion order
    graph = AuthoredGraph()
    late = graph.add_node(LineNode(id="late", text=Literal("second")))
    entry = graph.add_node(EntryNode(id="entry"))
    early = graph.add_node(LineNode(id="early", text=Literal("first")))
    exit_node = graph.add_node(ExitNode(id="exit"))
    graph.connect(entry, early)
    graph.connect(early, late)
    graph.connect(late, exit_node)

    runtime = compile_graph(graph)

    assert runtime.entry_id == 2
    assert [(r.id, r.successor_id) for r in runtime.records] == [(0, NONE), (2, 0)]

def test_compilation_is_deterministic(linear_graph):
    graph, *_ = linear_graph
    assert compile_graph(graph) == compile_graph(graph)

def test_variable_bindings_resolve_to_defaults():
    graph = AuthoredGraph()
    graph.set_variable("hero", "Aria")
    graph.set_variable("greeting", 42)
    entry = graph.add_node(EntryNode())
    line = graph.add_node(LineNode(
        actor=VariableRef("hero"),
        text=VariableRef("greeting"),
        audio=VariableRef("missing"),
        callbacks=["wave"],
    ))
    graph.connect(entry, line)
    graph.add_node(ExitNode())

    record = compile_graph(graph).records[0]

    assert record.actor == "Aria"
    # Wrong type and unknown variable fall back to zero values
    assert record.text == ""
    assert record.audio is None
    assert record.callbacks == ("wave",)

def test_unbound_fields_are_zero_values():
    graph = AuthoredGraph()
    graph.add_node(LineNode())
    record = compile_graph(graph).records[0]
    assert (record.actor, record.audio, record.text) == ("", None, "")

def test_resolve_field_literal():
    graph = AuthoredGraph()
    assert resolve_field(graph, Literal("hi"), str, "") == "hi"
    assert resolve_field(graph, Literal(None), str, "") == ""
    assert resolve_field(graph, None, str, None) is None

def test_unknown_kind_is_fatal(linear_graph):
    graph, *_ = linear_graph
    graph.add_node(ChoiceNode())

    with pytest.raises(UnsupportedNodeKind) as exc:
        compile_graph(graph)

    assert exc.value.kind == "ChoiceNode"

def test_loop_back_is_refused(caplog):
    graph = AuthoredGraph("looping")
    entry = graph.add_node(EntryNode(id="entry"))
    a = graph.add_node(LineNode(id="a", text=Literal("Again?")))
    b = graph.add_node(LineNode(id="b", text=Literal("Again.")))
    graph.add_node(ExitNode(id="exit"))
    graph.connect(entry, a)
    graph.connect(a, b)
    graph.connect(b, a)

    with caplog.at_level(logging.ERROR, logger="dialogue.compiler"):
        with pytest.raises(DialogueCycleError) as exc_info:
            compile_graph(graph)

    assert exc_info.value.cycle == [1, 2]
    assert exc_info.value.name == "looping"
    assert "loops through node 1" in caplog.text

def test_self_loop_is_refused():
    graph = AuthoredGraph()
    entry = graph.add_node(EntryNode())
    line = graph.add_node(LineNode(text=Literal("Echo")))
    graph.add_node(ExitNode())
    graph.connect(entry, line)
    graph.connect(line, line)

    with pytest.raises(DialogueCycleError):
        compile_graph(graph)

def test_unreachable_loop_is_refused():
    graph = AuthoredGraph()
    entry = graph.add_node(EntryNode())
    exit_node = graph.add_node(ExitNode())
    a = graph.add_node(LineNode(id="a"))
    b = graph.add_node(LineNode(id="b"))
    graph.connect(entry, exit_node)
    graph.connect(a, b)
    graph.connect(b, a)

    with pytest.raises(DialogueCycleError) as exc_info:
        compile_graph(graph)

    assert sorted(exc_info.value.cycle) == [2, 3]

def test_find_cycle_on_chains():
    records = [
        DialogueNode(id=0, successor_id=1),
        DialogueNode(id=1, successor_id=NONE),
        DialogueNode(id=2, successor_id=1),
        DialogueNode(id=3, successor_id=9),
    ]
    assert find_cycle(records) == []
    assert find_cycle(records + [DialogueNode(id=4, successor_id=5), DialogueNode(id=5, successor_id=4)]) == [4, 5]
