"""Extraction of markdown-style pipe tables into structured rows."""

import logging
import re
from typing import List, Sequence, Union

from aontas.core.models import ClassifiedLine, Table

logger = logging.getLogger(__name__)

_SEPARATOR_CELL_RE = re.compile(r"-+")


def split_row(line: str) -> List[str]:
    """Split a `| a | b |` row into trimmed cells.

    The leading segment before the first pipe is always dropped. The trailing
    segment is dropped only when the row ends with a pipe, so a row missing
    its closing pipe keeps its last cell.
    """
    t = line.strip()
    parts = t.split("|")[1:]
    if t.endswith("|") and parts:
        parts = parts[:-1]
    return [p.strip() for p in parts]


def is_separator(cells: Sequence[str]) -> bool:
    if not cells:
        return False
    return all(_SEPARATOR_CELL_RE.fullmatch(c.replace(":", "").strip()) for c in cells)


def extract_table(rows: Sequence[Union[ClassifiedLine, str]]) -> Table:
    raw_lines = [r.raw if isinstance(r, ClassifiedLine) else r for r in rows]

    parsed: List[List[str]] = []
    for line in raw_lines:
        cells = split_row(line)
        if is_separator(cells):
            continue
        parsed.append(cells)

    if not parsed:
        logger.warning("Table run of %d line(s) has no content rows; keeping it verbatim", len(raw_lines))
        return Table(rows=[["\n".join(line.strip() for line in raw_lines)]], verbatim=True)

    widths = {len(r) for r in parsed}
    if len(widths) > 1:
        logger.debug("Ragged table rows kept as-is (column counts %s)", sorted(widths))

    return Table(rows=parsed)


def format_row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def table_to_lines(table: Table) -> List[str]:
    """Flatten a table back to pipe-joined rows (no separator row)."""
    if table.verbatim:
        return table.rows[0][0].split("\n") if table.rows else []
    return [format_row(row) for row in table.rows]
