"""Resource loading - compiled dialogue storage."""

from engine.resources.database import DialogueDatabase

__all__ = ["DialogueDatabase"]
