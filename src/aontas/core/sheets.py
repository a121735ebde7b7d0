"""Builders for the line sequences that the composer turns into documents.

Every builder returns plain lines in the conventions the classifier reads:
banner titles, `Label: value` metadata, `=== section ===` dividers and pipe
tables embedded in prompts.
"""

import string
from dataclasses import dataclass
from typing import List, Sequence, Union

from aontas.core.composer import split_lines
from aontas.grading.evaluator import is_auto_gradable
from aontas.grading.exercises import ExerciseItem, Mode

EXPORT_TITLE = "Aontas-10 export"
KEY_TITLE = "Teacher answer key"
BLANK = "________________"


@dataclass(frozen=True)
class ExportContext:
    output_language: str = "English"
    level: str = "B1"
    output_type: str = "article"
    dyslexia_friendly: bool = True

    @property
    def tags(self) -> List[str]:
        return [self.output_type, self.level]

    def metadata_lines(self) -> List[str]:
        return [
            f"Output language: {self.output_language}",
            f"Level: {self.level}",
            f"Output type: {self.output_type}",
            f"Dyslexia-friendly: {'yes' if self.dyslexia_friendly else 'no'}",
        ]


def section(title: str) -> str:
    return f"=== {title} ==="


def _text_lines(text: str) -> List[str]:
    return split_lines((text or "").strip())


def build_export_lines(standard: str, adapted: str, ctx: ExportContext) -> List[str]:
    lines = [EXPORT_TITLE, *ctx.metadata_lines(), ""]
    lines += [section("Reading text (STANDARD version)"), "", *_text_lines(standard), ""]
    lines += [section("Reading text (ADAPTED version)"), "", *_text_lines(adapted), ""]
    return lines


def _option_label(idx: int) -> str:
    if idx < len(string.ascii_uppercase):
        return string.ascii_uppercase[idx]
    return str(idx + 1)


def worksheet_title(mode: Union[Mode, str]) -> str:
    return f"Student worksheet ({Mode(mode).value.upper()} version)"


def build_worksheet_lines(items: Sequence[ExerciseItem], mode: Union[Mode, str], ctx: ExportContext) -> List[str]:
    lines = [worksheet_title(mode), *ctx.metadata_lines(), ""]
    for item in items:
        side = item.side(mode)
        prompt = _text_lines(side.prompt)
        lines.append(f"{item.id}. {prompt[0]}")
        lines.extend(prompt[1:])
        if side.options:
            lines.extend(f"   {_option_label(i)}) {opt}" for i, opt in enumerate(side.options))
        elif isinstance(item.answer, list) and is_auto_gradable(item):
            lines.extend(f"   ({k}) {BLANK}" for k in range(1, len(item.answer) + 1))
        else:
            lines.append(f"   Answer: {BLANK}")
        lines.append("")
    return lines


def build_answer_key_lines(items: Sequence[ExerciseItem], ctx: ExportContext) -> List[str]:
    lines = [KEY_TITLE, *ctx.metadata_lines(), ""]
    for item in items:
        label = item.type.value if not item.skill else f"{item.type.value} / {item.skill}"
        line = f"{item.id}. [{label}] {item.display_answer}"
        if not is_auto_gradable(item):
            line += " (teacher-checked)"
        lines.append(line)
    lines.append("")
    return lines
