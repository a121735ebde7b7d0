"""Exercise items as produced by the exercise-generation service."""

import json
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from aontas.core.errors import ExercisePayloadError

logger = logging.getLogger(__name__)


class ExerciseType(str, Enum):
    GIST = "gist"
    DETAIL = "detail"
    TRUE_FALSE = "trueFalse"
    VOCAB = "vocab"
    CLOZE = "cloze"
    ORDERING = "ordering"


class Mode(str, Enum):
    """Which version of the text a learner is working from."""
    STANDARD = "standard"
    ADAPTED = "adapted"


Answer = Union[str, List[str]]


@dataclass(frozen=True)
class ExerciseSide:
    prompt: str
    options: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExerciseSide":
        options = data.get("options")
        if isinstance(options, list) and options:
            options = [str(o) for o in options]
        else:
            options = None
        return cls(prompt=str(data.get("prompt") or ""), options=options)


@dataclass(frozen=True)
class ExerciseItem:
    id: int
    type: ExerciseType
    answer: Answer
    standard: ExerciseSide
    adapted: ExerciseSide
    skill: str = ""

    @property
    def is_multi_blank(self) -> bool:
        return isinstance(self.answer, list)

    @property
    def display_answer(self) -> str:
        if isinstance(self.answer, list):
            return " / ".join(self.answer)
        return self.answer

    def side(self, mode: Union[Mode, str]) -> ExerciseSide:
        return self.adapted if Mode(mode) is Mode.ADAPTED else self.standard


def _coerce_answer(value: Any) -> Answer:
    if isinstance(value, list):
        return [str(v) for v in value]
    if value is None:
        return ""
    return str(value)


def item_from_dict(data: Dict[str, Any]) -> ExerciseItem:
    if not isinstance(data, dict):
        raise ExercisePayloadError(f"Exercise item must be an object, got {type(data).__name__}")
    try:
        item_type = ExerciseType(data.get("type"))
    except ValueError as e:
        raise ExercisePayloadError(f"Unknown exercise type: {data.get('type')!r}") from e
    try:
        item_id = int(data.get("id", 0))
    except (TypeError, ValueError) as e:
        raise ExercisePayloadError(f"Invalid exercise id: {data.get('id')!r}") from e

    sides = {}
    for name in ("standard", "adapted"):
        side = data.get(name)
        if side is not None and not isinstance(side, dict):
            raise ExercisePayloadError(f"Exercise {name!r} side must be an object, got {type(side).__name__}")
        sides[name] = ExerciseSide.from_dict(side or {})

    return ExerciseItem(
        id=item_id,
        type=item_type,
        skill=str(data.get("skill") or ""),
        answer=_coerce_answer(data.get("answer")),
        standard=sides["standard"],
        adapted=sides["adapted"],
    )


def renumber(items: List[ExerciseItem]) -> List[ExerciseItem]:
    """Sort by id and, unless the ids are already 1..N, renumber them 1..N."""
    ordered = sorted(items, key=lambda it: it.id)
    if all(it.id == idx for idx, it in enumerate(ordered, start=1)):
        return ordered
    logger.debug("Exercise ids %s are not consecutive; renumbering", [it.id for it in ordered])
    return [replace(it, id=idx) for idx, it in enumerate(ordered, start=1)]


def _loads(raw: str) -> Any:
    start = raw.find("{")
    end = raw.rfind("}")
    snippet = raw[start:end + 1] if start >= 0 and end > start else raw
    try:
        return json.loads(snippet)
    except json.JSONDecodeError as e:
        raise ExercisePayloadError(f"Exercise payload is not valid JSON: {e}") from e


def parse_exercise_set(payload: Union[str, Dict[str, Any]]) -> List[ExerciseItem]:
    """Parse `{"items": [...]}` (a dict or raw model output) into ordered items."""
    data = _loads(payload) if isinstance(payload, str) else payload
    items = data.get("items") if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise ExercisePayloadError("Exercise payload did not contain a valid items array.")
    return renumber([item_from_dict(d) for d in items])
