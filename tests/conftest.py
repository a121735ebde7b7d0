import json

import pytest

import aontas.plugins  # noqa: F401
from aontas.core.sheets import ExportContext
from aontas.grading.exercises import parse_exercise_set

SAMPLE_LINES = [
    "Aontas-10 export",
    "Level: B1",
    "",
    "=== Reading text (STANDARD version) ===",
    "Rivers carry water to the sea.",
    "| Problem | Solution |",
    "| --- | :---: |",
    "| Floods | Walls |",
    "| Drought | Dams |",
    "The end.",
]

SAMPLE_PAYLOAD = {
    "items": [
        {
            "id": 1, "type": "gist", "skill": "main idea", "answer": "Rivers",
            "standard": {"prompt": "What is the text about?"},
            "adapted": {"prompt": "Choose the topic.", "options": ["Rivers", "Cars", "Food"]},
        },
        {
            "id": 2, "type": "cloze", "skill": "cloze with word bank", "answer": ["fast", "slow"],
            "standard": {"prompt": "The river is ___ in spring and ___ in summer."},
            "adapted": {"prompt": "Fill the gaps: fast, slow.", "options": []},
        },
        {
            "id": 3, "type": "gist", "skill": "matching headings to paragraphs", "answer": "1-B, 2-A",
            "standard": {"prompt": "Match the headings."},
            "adapted": {"prompt": "Match."},
        },
        {
            "id": 4, "type": "ordering", "skill": "event ordering", "answer": ["rain", "flood"],
            "standard": {"prompt": "Put the events in order."},
            "adapted": {"prompt": "Order these."},
        },
    ]
}


@pytest.fixture
def sample_lines():
    return list(SAMPLE_LINES)


@pytest.fixture
def sample_items():
    return parse_exercise_set(SAMPLE_PAYLOAD)


@pytest.fixture
def export_context():
    return ExportContext(output_language="English", level="B1", output_type="blog post")


@pytest.fixture
def exercise_file(tmp_path):
    path = tmp_path / "exercises.json"
    path.write_text(json.dumps(SAMPLE_PAYLOAD), encoding="utf-8")
    return str(path)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("AONTAS_CONFIG", str(tmp_path / "settings.json"))
