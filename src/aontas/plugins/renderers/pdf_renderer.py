"""Paginated fixed-width renderer encoded as PDF with fpdf2.

Layout is computed first as pages of placed lines (pure, independent of the
PDF library) and only then drawn, so pagination can be checked on content.
"""

import logging
import textwrap
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from fpdf import FPDF

from aontas.core.models import SECTION_LEVEL, Block
from aontas.core.tables import format_row, table_to_lines
from aontas.plugins.registry import Renderer, RendererRegistry

logger = logging.getLogger(__name__)

MAX_CHARS = 90
PAGE_HEIGHT = 280.0
TOP_MARGIN = 20.0
LEFT_MARGIN = 15.0
LINE_HEIGHT = 6.0
HEADING_LINE_HEIGHT = 9.0

# style -> (font family key, font style, size)
_FONTS = {
    "banner": ("sans", "B", 16),
    "section": ("sans", "B", 13),
    "body": ("sans", "", 11),
    "meta": ("sans", "I", 10),
    "table_header": ("mono", "B", 10),
    "table": ("mono", "", 10),
}
_HEADING_STYLES = {"banner", "section"}

_PUNCTUATION = str.maketrans({
    "–": "-", "—": "-", "‘": "'", "’": "'",
    "“": '"', "”": '"', "…": "...", "•": "-",
})


@dataclass(frozen=True)
class PlacedLine:
    text: str
    style: str
    # Baseline offset from the top of the page
    y: float


def _styled_lines(blocks: Sequence[Block]) -> Iterable[Tuple[str, str]]:
    for block in blocks:
        if block.kind == "heading":
            yield ("section" if block.level >= SECTION_LEVEL else "banner"), block.text
        elif block.kind == "paragraph":
            if block.is_spacer:
                yield "body", ""
            else:
                yield ("meta" if block.is_metadata else "body"), block.text
        elif block.kind == "table":
            table = block.table
            if table.verbatim:
                for line in table_to_lines(table):
                    yield "table", line
            else:
                for idx, row in enumerate(table.rows):
                    yield ("table_header" if idx == 0 else "table"), format_row(row)
        else:
            raise TypeError(f"Unknown block kind: {block.kind!r}")


def layout_pages(blocks: Sequence[Block], options: Dict[str, Any]) -> List[List[PlacedLine]]:
    max_chars = options.get("max_chars", MAX_CHARS)
    page_height = options.get("page_height", PAGE_HEIGHT)
    top_margin = options.get("top_margin", TOP_MARGIN)
    line_height = options.get("line_height", LINE_HEIGHT)
    heading_line_height = options.get("heading_line_height", HEADING_LINE_HEIGHT)

    pages: List[List[PlacedLine]] = [[]]
    y = top_margin
    for style, text in _styled_lines(blocks):
        step = heading_line_height if style in _HEADING_STYLES else line_height
        for piece in textwrap.wrap(text, width=max_chars) or [""]:
            if y + step > page_height and pages[-1]:
                pages.append([])
                y = top_margin
            y += step
            pages[-1].append(PlacedLine(text=piece, style=style, y=y))
    return pages


def _to_latin1(text: str) -> Tuple[str, bool]:
    text = text.translate(_PUNCTUATION)
    safe = text.encode("latin-1", "replace").decode("latin-1")
    return safe, safe != text


class PdfRenderer(Renderer):
    @classmethod
    def get_format(cls) -> str:
        return "pdf"

    @classmethod
    def get_media_type(cls) -> str:
        return "application/pdf"

    def render(self, blocks: Sequence[Block], options: Dict[str, Any]) -> bytes:
        font_path = options.get("font_path")
        left_margin = options.get("left_margin", LEFT_MARGIN)

        pdf = FPDF(orientation="P", unit="mm", format="A4")
        pdf.set_auto_page_break(False)

        if font_path:
            for style in ("", "B", "I"):
                pdf.add_font("Body", style, font_path)
            families = {"sans": "Body", "mono": "Body"}
        else:
            families = {"sans": "Helvetica", "mono": "Courier"}

        replaced = False
        for page in layout_pages(blocks, options):
            pdf.add_page()
            for line in page:
                family, style, size = _FONTS[line.style]
                pdf.set_font(families[family], style=style, size=size)
                text = line.text
                if not font_path:
                    text, changed = _to_latin1(text)
                    replaced = replaced or changed
                if text:
                    pdf.text(left_margin, line.y, text)

        if replaced:
            logger.warning("Characters outside Latin-1 were replaced; pass font_path for full Unicode output")
        return bytes(pdf.output())

RendererRegistry.register(PdfRenderer)
