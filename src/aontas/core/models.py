from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional, Union


class Role(str, Enum):
    BANNER_HEADING = "bannerHeading"
    SECTION_HEADING = "sectionHeading"
    METADATA = "metadata"
    BODY = "body"
    TABLE_ROW = "tableRow"


@dataclass(frozen=True)
class ClassifiedLine:
    raw: str
    role: Role
    # Decoration-stripped text, set for section headings only
    display: Optional[str] = None

    @property
    def text(self) -> str:
        return self.display if self.display is not None else self.raw.strip()


@dataclass(frozen=True)
class Table:
    """Rows of cells. Row 0 is the header whenever at least one row exists.

    `verbatim` marks the single-cell fallback built from unparsable input;
    renderers show it as plain text rather than as a header cell.
    """
    rows: List[List[str]] = field(default_factory=list)
    verbatim: bool = False

    @property
    def header(self) -> List[str]:
        if not self.rows or self.verbatim:
            return []
        return self.rows[0]

    @property
    def body(self) -> List[List[str]]:
        if self.verbatim:
            return list(self.rows)
        return self.rows[1:]

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)


# Blocks form a tagged union discriminated by `kind`; renderers switch on it.

@dataclass(frozen=True)
class HeadingBlock:
    text: str
    # 1 = banner heading, 2 = section heading
    level: int = 1
    kind: Literal["heading"] = "heading"


@dataclass(frozen=True)
class ParagraphBlock:
    text: str
    is_metadata: bool = False
    kind: Literal["paragraph"] = "paragraph"

    @property
    def is_spacer(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class TableBlock:
    table: Table
    kind: Literal["table"] = "table"

    @property
    def rows(self) -> List[List[str]]:
        return self.table.rows


Block = Union[HeadingBlock, ParagraphBlock, TableBlock]

BANNER_LEVEL = 1
SECTION_LEVEL = 2


@dataclass(frozen=True)
class Artifact:
    """Rendered output in one format, with a suggested download name."""
    filename: str
    content: bytes
    media_type: str
