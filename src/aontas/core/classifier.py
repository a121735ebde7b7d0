"""Line classifier: assigns a semantic role to a single line of generated text."""

import re

from aontas.core.models import ClassifiedLine, Role

# Titles that open a document or a sheet
BANNER_PREFIXES = (
    "Aontas-10 export",
    "Student worksheet",
    "Teacher answer key",
    "STANDARD VERSION",
    "ADAPTED VERSION",
)

METADATA_LABELS = (
    "Output language:",
    "Language:",
    "Level:",
    "Output type:",
    "Type:",
    "Dyslexia-friendly:",
    "Source:",
    "Length:",
    "Mode:",
)

_SECTION_RE = re.compile(r"^={3,}\s*(.*?\S)\s*={3,}$")


def section_title(text: str):
    """Return the decoration-stripped title of an `=== title ===` line, else None."""
    m = _SECTION_RE.match(text.strip())
    if not m:
        return None
    title = m.group(1).strip("= \t")
    return title or None


def is_table_row(text: str) -> bool:
    t = text.strip()
    return t.startswith("|") and "|" in t[1:]


def classify_line(line: str) -> ClassifiedLine:
    t = line.strip()
    if not t:
        return ClassifiedLine(raw=line, role=Role.BODY)

    if t.startswith(BANNER_PREFIXES):
        return ClassifiedLine(raw=line, role=Role.BANNER_HEADING)

    title = section_title(t)
    if title is not None:
        return ClassifiedLine(raw=line, role=Role.SECTION_HEADING, display=title)

    if t.startswith(METADATA_LABELS):
        return ClassifiedLine(raw=line, role=Role.METADATA)

    if is_table_row(t):
        return ClassifiedLine(raw=line, role=Role.TABLE_ROW)

    return ClassifiedLine(raw=line, role=Role.BODY)


def classify(line: str) -> Role:
    return classify_line(line).role
