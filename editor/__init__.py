"""
Editor module.

Authoring-side tooling for dialogue graphs: live validation while a
graph is edited, and the import step that compiles ``.dialogue``
documents into runtime assets.
"""

from editor.events import EditorEvent
from editor.importer import DialogueImporter, compile_dialogue_file

__all__ = [
    "EditorEvent",
    "DialogueImporter",
    "compile_dialogue_file",
]
