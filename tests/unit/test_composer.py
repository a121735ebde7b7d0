from aontas.core.composer import compose, compose_text, split_lines
from aontas.core.models import BANNER_LEVEL, SECTION_LEVEL, HeadingBlock, ParagraphBlock, TableBlock
from aontas.core.tables import table_to_lines


def _non_blank_text(blocks):
    out = []
    for b in blocks:
        if b.kind == "table":
            out.extend(table_to_lines(b.table))
        elif b.text.strip():
            out.append(b.text)
    return out


def test_compose_block_sequence(sample_lines):
    blocks = compose(sample_lines)
    kinds = [b.kind for b in blocks]
    assert kinds == ["heading", "paragraph", "paragraph", "heading", "paragraph", "table", "paragraph"]

    assert blocks[0] == HeadingBlock(text="Aontas-10 export", level=BANNER_LEVEL)
    assert blocks[1].is_metadata
    assert blocks[2].is_spacer
    assert blocks[2].text == " "
    assert blocks[3] == HeadingBlock(text="Reading text (STANDARD version)", level=SECTION_LEVEL)

    table = blocks[5]
    assert isinstance(table, TableBlock)
    assert table.rows == [["Problem", "Solution"], ["Floods", "Walls"], ["Drought", "Dams"]]


def test_blank_line_splits_tables():
    blocks = compose(["| a | b |", "", "| c | d |"])
    assert [b.kind for b in blocks] == ["table", "paragraph", "table"]


def test_content_is_preserved():
    lines = ["Intro", "", "| x | y |", "| 1 | 2 |", "Outro", "   "]
    blocks = compose(lines)
    assert len(blocks) >= 1
    assert _non_blank_text(blocks) == ["Intro", "| x | y |", "| 1 | 2 |", "Outro"]


def test_every_visual_line_has_a_block():
    assert compose(["", ""]) == [ParagraphBlock(text=" "), ParagraphBlock(text=" ")]


def test_compose_text_normalizes_newlines():
    assert split_lines("a\r\nb\rc") == ["a", "b", "c"]
    assert len(compose_text("a\r\nb")) == 2
