import json
import pytest
from engine.resources.database import DialogueDatabase
from dialogue.runtime import serialize

@pytest.fixture
def mock_db_path(tmp_path):
    (tmp_path / "dialogue").mkdir()
    return tmp_path

def test_load_all(mock_db_path, two_line_runtime):
    (mock_db_path / "dialogue" / "intro.json").write_text(serialize(two_line_runtime))

    db = DialogueDatabase(mock_db_path)
    assert db.load_all() == 1

    assert "intro" in db
    assert db.get("intro") == two_line_runtime

def test_invalid_file_is_skipped(mock_db_path, two_line_runtime):
    (mock_db_path / "dialogue" / "intro.json").write_text(serialize(two_line_runtime))
    # Missing entry_id
    with open(mock_db_path / "dialogue" / "broken.json", "w") as f:
        json.dump({"records": []}, f)
    (mock_db_path / "dialogue" / "garbage.json").write_text("{not json")

    db = DialogueDatabase(mock_db_path)
    db.load_all()

    assert "intro" in db
    assert "broken" not in db
    assert "garbage" not in db

def test_unknown_kind_is_skipped(mock_db_path):
    with open(mock_db_path / "dialogue" / "future.json", "w") as f:
        json.dump({
            "entry_id": 0,
            "records": [{"id": 0, "successor_id": -1, "kind": "choice"}],
        }, f)

    db = DialogueDatabase(mock_db_path)
    db.load_all()

    assert db.get("future") is None

def test_missing_directory(tmp_path):
    db = DialogueDatabase(tmp_path / "nowhere")
    assert db.load_all() == 0
    assert db.dialogues == {}
