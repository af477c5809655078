"""
Dialogue Database.

Loads compiled runtime dialogue graphs from the data directory:

    <data_path>/dialogue/<dialogue_id>.json

Every file is validated against the runtime graph schema on load.
Broken files are logged and skipped so one bad asset does not take the
rest of the game's dialogue down with it.
"""

import logging
from pathlib import Path

from dialogue.errors import DialogueError
from dialogue.runtime import RuntimeGraph, load_runtime_graph


class DialogueDatabase:
    """
    Central storage for compiled dialogue.
    """

    def __init__(self, data_path: Path | str):
        self._data_path = Path(data_path)
        self.dialogues: dict[str, RuntimeGraph] = {}

        self.logger = logging.getLogger(__name__)

    @property
    def dialogue_dir(self) -> Path:
        return self._data_path / "dialogue"

    def load_all(self) -> int:
        """
        Load every runtime graph on disk.

        Returns:
            Number of dialogues loaded
        """
        self.dialogues.clear()

        if not self.dialogue_dir.exists():
            self.logger.warning(f"Data directory not found: {self.dialogue_dir}")
            return 0

        for file_path in sorted(self.dialogue_dir.glob("*.json")):
            try:
                self.dialogues[file_path.stem] = load_runtime_graph(file_path)
            except (OSError, DialogueError) as e:
                self.logger.error(f"Failed to load {file_path}: {e}")

        self.logger.info(f"Loaded {len(self.dialogues)} dialogues.")
        return len(self.dialogues)

    def get(self, dialogue_id: str) -> RuntimeGraph | None:
        return self.dialogues.get(dialogue_id)

    def __contains__(self, dialogue_id: str) -> bool:
        return dialogue_id in self.dialogues
