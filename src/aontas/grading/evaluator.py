"""Auto-grading of learner answers against the shared answer key."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from aontas.grading.exercises import ExerciseItem, Mode

logger = logging.getLogger(__name__)

# Skill/type fragments that mark tasks a machine cannot check
UNGRADABLE_MARKERS = ("order", "matching")

# JSON answers may arrive as numbers or booleans; scalars are compared as text
Submission = Union[None, str, int, float, Sequence[Any]]


class Verdict(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNGRADED = "ungraded"


@dataclass(frozen=True)
class GradingVerdict:
    verdict: Verdict
    answer: str

    @property
    def is_graded(self) -> bool:
        return self.verdict is not Verdict.UNGRADED


def normalize(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def is_auto_gradable(item: ExerciseItem) -> bool:
    text = f"{item.type.value} {item.skill}".lower()
    return not any(marker in text for marker in UNGRADABLE_MARKERS)


def _as_text(submission: Submission) -> str:
    if submission is None:
        return ""
    if isinstance(submission, (list, tuple)):
        return " ".join(str(s) for s in submission if s is not None)
    return str(submission)


def _grade_blanks(expected: List[str], submission: Submission) -> Verdict:
    if not expected:
        return Verdict.UNGRADED
    if submission is None:
        blanks = [""] * len(expected)
    elif isinstance(submission, (list, tuple)):
        blanks = list(submission)
    else:
        # A lone value answers a single blank
        blanks = [submission]

    if len(blanks) != len(expected):
        logger.debug("Blank count mismatch (%d submitted, %d expected); not grading", len(blanks), len(expected))
        return Verdict.UNGRADED

    ok = all(normalize(got) == normalize(want) for got, want in zip(blanks, expected))
    return Verdict.CORRECT if ok else Verdict.INCORRECT


def _grade_choice(expected: str, options: List[str], submission: Submission) -> Verdict:
    want = normalize(expected)
    if want not in {normalize(o) for o in options}:
        logger.debug("Answer %r matches none of the options %r; not grading", expected, options)
        return Verdict.UNGRADED
    return Verdict.CORRECT if normalize(_as_text(submission)) == want else Verdict.INCORRECT


def _grade_free_text(expected: str, submission: Submission) -> Verdict:
    want = normalize(expected)
    if not want:
        return Verdict.UNGRADED
    got = normalize(_as_text(submission))
    if not got:
        return Verdict.INCORRECT
    # Containment either way counts; a long answer that merely includes the key passes too.
    if got == want or want in got or got in want:
        return Verdict.CORRECT
    return Verdict.INCORRECT


def evaluate(item: ExerciseItem, submission: Submission, mode: Union[Mode, str] = Mode.STANDARD) -> GradingVerdict:
    """
    Grade one submission. Ordering and matching tasks are never auto-graded;
    ambiguity (blank-count mismatch, answer key not among the options) also
    yields UNGRADED. An empty submission to a gradable item is INCORRECT.
    """
    answer = item.display_answer

    if not is_auto_gradable(item):
        verdict = Verdict.UNGRADED
    elif isinstance(item.answer, list):
        verdict = _grade_blanks(item.answer, submission)
    else:
        options = item.side(mode).options
        if options:
            verdict = _grade_choice(item.answer, options, submission)
        else:
            verdict = _grade_free_text(item.answer, submission)

    return GradingVerdict(verdict=verdict, answer=answer)


@dataclass
class Scoreboard:
    """Running score for one worksheet session; UNGRADED never enters the denominator."""
    correct: int = 0
    graded: int = 0
    ungraded: int = 0

    def record(self, result: GradingVerdict) -> GradingVerdict:
        if result.verdict is Verdict.UNGRADED:
            self.ungraded += 1
        else:
            self.graded += 1
            if result.verdict is Verdict.CORRECT:
                self.correct += 1
        return result

    @property
    def percent(self) -> Optional[float]:
        if not self.graded:
            return None
        return 100.0 * self.correct / self.graded


def grade_all(
    items: Sequence[ExerciseItem],
    submissions: Mapping[int, Submission],
    mode: Union[Mode, str] = Mode.STANDARD,
) -> Tuple[Dict[int, GradingVerdict], Scoreboard]:
    board = Scoreboard()
    results: Dict[int, GradingVerdict] = {}
    for item in items:
        results[item.id] = board.record(evaluate(item, submissions.get(item.id), mode))
    return results, board
