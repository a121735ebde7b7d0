"""Approximate matching of a spoken transcript against the expected phrase."""

import re
from dataclasses import dataclass

# Feedback tiers for pronunciation attempts
GOOD_THRESHOLD = 0.85
CLOSE_THRESHOLD = 0.6

_DISALLOWED_RE = re.compile(r"[^a-z0-9áàâäãåæçéèêëíìîïñóòôöõøœúùûüýÿß\s]")
_WS_RE = re.compile(r"\s+")


def normalize_phrase(s: str) -> str:
    s = (s or "").lower()
    s = _DISALLOWED_RE.sub("", s)
    return _WS_RE.sub(" ", s).strip()


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit-cost insert, delete and substitute."""
    if len(a) < len(b):
        a, b = b, a
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i]
        for j, cb in enumerate(b, start=1):
            cur.append(min(
                prev[j] + 1,
                cur[j - 1] + 1,
                prev[j - 1] + (ca != cb),
            ))
        prev = cur
    return prev[-1]


def similarity(expected: str, transcribed: str) -> float:
    a = normalize_phrase(expected)
    b = normalize_phrase(transcribed)
    if not a or not b:
        return 0.0
    return 1.0 - edit_distance(a, b) / max(len(a), len(b))


@dataclass(frozen=True)
class PronunciationResult:
    score: float
    tier: str


def feedback_tier(score: float, good: float = GOOD_THRESHOLD, close: float = CLOSE_THRESHOLD) -> str:
    if score >= good:
        return "good"
    if score >= close:
        return "close"
    return "retry"


def score_attempt(
    expected: str,
    transcript: str,
    good: float = GOOD_THRESHOLD,
    close: float = CLOSE_THRESHOLD,
) -> PronunciationResult:
    score = similarity(expected, transcript)
    return PronunciationResult(score=score, tier=feedback_tier(score, good, close))
