"""Turns an ordered sequence of generated lines into document blocks."""

import logging
from typing import List, Sequence

from aontas.core.classifier import classify_line
from aontas.core.models import (
    BANNER_LEVEL,
    SECTION_LEVEL,
    Block,
    HeadingBlock,
    ParagraphBlock,
    Role,
    TableBlock,
)
from aontas.core.tables import extract_table

logger = logging.getLogger(__name__)

SPACER = " "


def split_lines(text: str) -> List[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def compose(lines: Sequence[str]) -> List[Block]:
    """
    Single forward pass over `lines`. Runs of consecutive table rows (including
    separator rows) become one TableBlock; blank lines become spacer paragraphs
    so every visual line keeps a block.
    """
    classified = [classify_line(line) for line in lines]
    blocks: List[Block] = []

    i = 0
    n = len(classified)
    while i < n:
        cl = classified[i]

        if cl.role is Role.TABLE_ROW:
            j = i
            while j < n and classified[j].role is Role.TABLE_ROW:
                j += 1
            blocks.append(TableBlock(table=extract_table(classified[i:j])))
            i = j
            continue

        if cl.role is Role.BANNER_HEADING:
            blocks.append(HeadingBlock(text=cl.text, level=BANNER_LEVEL))
        elif cl.role is Role.SECTION_HEADING:
            blocks.append(HeadingBlock(text=cl.text, level=SECTION_LEVEL))
        elif cl.role is Role.METADATA:
            blocks.append(ParagraphBlock(text=cl.text, is_metadata=True))
        elif cl.text:
            # Leading indentation is kept for option and blank lines
            blocks.append(ParagraphBlock(text=cl.raw.rstrip()))
        else:
            blocks.append(ParagraphBlock(text=SPACER))
        i += 1

    logger.debug("Composed %d line(s) into %d block(s)", n, len(blocks))
    return blocks


def compose_text(text: str) -> List[Block]:
    return compose(split_lines(text))
