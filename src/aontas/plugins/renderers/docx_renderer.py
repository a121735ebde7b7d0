"""Styled page-flow renderer encoded as DOCX with python-docx."""

from io import BytesIO
from typing import Any, Dict, Sequence

from docx import Document
from docx.document import Document as _Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Cm, Pt
from docx.text.paragraph import Paragraph

from aontas.core.models import SECTION_LEVEL, Block, HeadingBlock, TableBlock
from aontas.core.tables import table_to_lines
from aontas.plugins.registry import Renderer, RendererRegistry

MARGIN_CM = 2.0
FONT_NAME = "Arial"
BODY_SIZE = 11
METADATA_SIZE = 10
BANNER_SIZE = 18
SECTION_SIZE = 14
HEADING_SPACE_BEFORE = 12
HEADING_SPACE_AFTER = 6


def _add_bottom_rule(paragraph: Paragraph) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "4")
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), "auto")
    borders.append(bottom)
    # pBdr must precede these siblings in w:pPr
    p_pr.insert_element_before(
        borders,
        "w:shd", "w:tabs", "w:suppressAutoHyphens", "w:kinsoku", "w:wordWrap",
        "w:overflowPunct", "w:topLinePunct", "w:autoSpaceDE", "w:autoSpaceDN",
        "w:bidi", "w:adjustRightInd", "w:snapToGrid", "w:spacing", "w:ind",
        "w:contextualSpacing", "w:mirrorIndents", "w:suppressOverlap", "w:jc",
        "w:textDirection", "w:textAlignment", "w:textboxTightWrap",
        "w:outlineLvl", "w:divId", "w:cnfStyle", "w:rPr", "w:sectPr", "w:pPrChange",
    )


def _set_full_width(table) -> None:
    tbl_pr = table._tbl.tblPr
    width = tbl_pr.find(qn("w:tblW"))
    if width is None:
        width = OxmlElement("w:tblW")
        tbl_pr.append(width)
    # pct is expressed in fiftieths of a percent
    width.set(qn("w:type"), "pct")
    width.set(qn("w:w"), "5000")


def _append_heading(document: _Document, block: HeadingBlock, options: Dict[str, Any]) -> None:
    is_section = block.level >= SECTION_LEVEL
    size = options.get("section_size", SECTION_SIZE) if is_section else options.get("banner_size", BANNER_SIZE)

    paragraph = document.add_paragraph()
    fmt = paragraph.paragraph_format
    fmt.space_before = Pt(HEADING_SPACE_BEFORE)
    fmt.space_after = Pt(HEADING_SPACE_AFTER)
    fmt.keep_with_next = True

    run = paragraph.add_run(block.text)
    run.bold = True
    run.font.size = Pt(size)

    if is_section:
        _add_bottom_rule(paragraph)


def _append_table(document: _Document, block: TableBlock) -> None:
    table = block.table
    if table.verbatim:
        # Unparsable run: one cell holding the raw lines
        docx_table = document.add_table(rows=1, cols=1)
        docx_table.style = "Table Grid"
        docx_table.cell(0, 0).text = "\n".join(table_to_lines(table))
        _set_full_width(docx_table)
        return

    column_count = table.column_count
    if column_count == 0:
        return

    docx_table = document.add_table(rows=len(table.rows), cols=column_count)
    docx_table.style = "Table Grid"
    docx_table.autofit = True
    _set_full_width(docx_table)

    for row_index, row in enumerate(table.rows):
        for column_index in range(column_count):
            value = row[column_index] if column_index < len(row) else ""
            cell_paragraph = docx_table.cell(row_index, column_index).paragraphs[0]
            run = cell_paragraph.add_run(value)
            if row_index == 0:
                run.bold = True


class DocxRenderer(Renderer):
    @classmethod
    def get_format(cls) -> str:
        return "docx"

    @classmethod
    def get_media_type(cls) -> str:
        return "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    def render(self, blocks: Sequence[Block], options: Dict[str, Any]) -> bytes:
        margin = Cm(options.get("margin_cm", MARGIN_CM))
        body_size = options.get("body_size", BODY_SIZE)

        document = Document()
        normal = document.styles["Normal"]
        normal.font.name = options.get("font_name", FONT_NAME)
        normal.font.size = Pt(body_size)

        for sec in document.sections:
            sec.top_margin = sec.bottom_margin = margin
            sec.left_margin = sec.right_margin = margin

        for block in blocks:
            if block.kind == "heading":
                _append_heading(document, block, options)
            elif block.kind == "paragraph":
                paragraph = document.add_paragraph()
                run = paragraph.add_run(block.text)
                if block.is_metadata:
                    run.italic = True
                    run.font.size = Pt(options.get("metadata_size", METADATA_SIZE))
            elif block.kind == "table":
                _append_table(document, block)
            else:
                raise TypeError(f"Unknown block kind: {block.kind!r}")

        buffer = BytesIO()
        document.save(buffer)
        return buffer.getvalue()

RendererRegistry.register(DocxRenderer)
