from aontas.core.classifier import classify_line
from aontas.core.tables import extract_table, split_row, table_to_lines


def test_markdown_table_drops_separator():
    table = extract_table(["| A | B |", "| - | - |", "| 1 | 2 |"])
    assert table.header == ["A", "B"]
    assert table.body == [["1", "2"]]
    assert not table.verbatim


def test_alignment_markers_are_separators():
    table = extract_table(["| Left | Mid |", "|:---|:---:|", "| x | y |"])
    assert table.rows == [["Left", "Mid"], ["x", "y"]]


def test_accepts_classified_lines():
    rows = [classify_line(s) for s in ["| A | B |", "| 1 | 2 |"]]
    assert extract_table(rows).rows == [["A", "B"], ["1", "2"]]


def test_ragged_rows_are_kept():
    table = extract_table(["| A | B | C |", "| 1 |", "| 1 | 2 | 3 | 4 |"])
    assert table.rows == [["A", "B", "C"], ["1"], ["1", "2", "3", "4"]]
    assert table.column_count == 4


def test_missing_closing_pipe_keeps_last_cell():
    assert split_row("| a | b") == ["a", "b"]


def test_separator_only_run_falls_back_to_verbatim():
    table = extract_table(["|---|---|", "| :-: |"])
    assert table.verbatim
    assert table.header == []
    assert table.rows == [["|---|---|\n| :-: |"]]
    assert table_to_lines(table) == ["|---|---|", "| :-: |"]


def test_flatten_round_trip_keeps_cells():
    source = ["| Name | Age |", "|------|-----|", "|  Ann | 12 |", "| Bo |  9 |"]
    table = extract_table(source)
    again = extract_table(table_to_lines(table))
    assert again.rows == table.rows == [["Name", "Age"], ["Ann", "12"], ["Bo", "9"]]
