import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure engine modules can be imported
sys.path.append(os.getcwd())

@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests so no audio device or joystick is touched.
    """
    with patch('pygame.init'), \
         patch('pygame.event'), \
         patch('pygame.mixer'), \
         patch('pygame.joystick'), \
         patch('pygame.key'):

        import pygame
        pygame.joystick.get_count = MagicMock(return_value=0)

        yield

@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from engine.core.events import EventBus
    return EventBus()

@pytest.fixture
def linear_graph():
    """Entry -> A -> B -> Exit, returned with its nodes."""
    from dialogue.graph import AuthoredGraph, EntryNode, ExitNode, LineNode, Literal

    graph = AuthoredGraph("linear")
    entry = graph.add_node(EntryNode(id="entry"))
    a = graph.add_node(LineNode(id="a", actor=Literal("Guard"), text=Literal("Halt!")))
    b = graph.add_node(LineNode(
        id="b",
        actor=Literal("Hero"),
        audio=Literal("hero_01.ogg"),
        text=Literal("Easy there."),
    ))
    exit_node = graph.add_node(ExitNode(id="exit"))
    graph.connect(entry, a)
    graph.connect(a, b)
    graph.connect(b, exit_node)
    return graph, entry, a, b, exit_node

@pytest.fixture
def two_line_runtime():
    """Runtime graph A(0) -> B(1) -> NONE."""
    from dialogue.runtime import NONE, DialogueNode, RuntimeGraph

    return RuntimeGraph(
        entry_id=0,
        records=(
            DialogueNode(id=0, successor_id=1, actor="Guard", text="Halt!"),
            DialogueNode(id=1, successor_id=NONE, actor="Hero", audio="hero_01.ogg", text="Easy there."),
        ),
    )
