import pytest

from aontas.core.errors import ExercisePayloadError
from aontas.grading.exercises import ExerciseType, Mode, parse_exercise_set


def test_parse_payload(sample_items):
    assert [it.id for it in sample_items] == [1, 2, 3, 4]
    first = sample_items[0]
    assert first.type is ExerciseType.GIST
    assert first.standard.options is None
    assert first.side(Mode.ADAPTED).options == ["Rivers", "Cars", "Food"]
    assert first.side("standard").prompt == "What is the text about?"
    assert sample_items[1].is_multi_blank
    assert sample_items[1].adapted.options is None


def test_ids_are_renumbered_in_order():
    items = parse_exercise_set({"items": [
        {"id": 7, "type": "detail", "answer": "b"},
        {"id": 3, "type": "gist", "answer": "a"},
        {"id": 9, "type": "vocab", "answer": "c"},
    ]})
    assert [(it.id, it.answer) for it in items] == [(1, "a"), (2, "b"), (3, "c")]


def test_parse_raw_model_output():
    raw = 'Here you go:\n{"items": [{"id": 1, "type": "trueFalse", "answer": true}]}\nThanks'
    items = parse_exercise_set(raw)
    assert items[0].answer == "True"


@pytest.mark.parametrize("payload", [
    {},
    {"items": "nope"},
    {"items": [{"id": 1, "type": "essay", "answer": "x"}]},
    {"items": [{"id": "one", "type": "gist", "answer": "x"}]},
    "not json at all",
    {"items": [{"id": 1, "type": "gist", "answer": "x", "standard": "What?"}]},
    {"items": [{"id": 1, "type": "gist", "answer": "x", "adapted": ["A", "B"]}]},
])
def test_bad_payloads_raise(payload):
    with pytest.raises(ExercisePayloadError):
        parse_exercise_set(payload)


def test_missing_sides_default_to_empty_prompt():
    items = parse_exercise_set({"items": [{"id": 1, "type": "gist", "answer": "x", "standard": None}]})
    assert items[0].standard.prompt == ""
    assert items[0].adapted.options is None
