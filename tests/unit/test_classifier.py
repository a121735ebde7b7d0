import pytest

from aontas.core.classifier import classify, classify_line, section_title
from aontas.core.models import Role


def test_section_heading_strips_decoration():
    cl = classify_line("=== Reading text (STANDARD version) ===")
    assert cl.role is Role.SECTION_HEADING
    assert cl.text == "Reading text (STANDARD version)"


@pytest.mark.parametrize("line", ["===== STANDARD OUTPUT =====", "  ===Vocabulary===  "])
def test_section_heading_variants(line):
    assert classify(line) is Role.SECTION_HEADING


def test_bare_equals_is_not_a_heading():
    assert section_title("=======") is None
    assert classify("== two only ==") is Role.BODY


def test_banner_heading():
    assert classify("Aontas-10 export") is Role.BANNER_HEADING
    assert classify("  Teacher answer key") is Role.BANNER_HEADING
    assert classify("Student worksheet (ADAPTED version)") is Role.BANNER_HEADING


def test_banner_takes_precedence_over_metadata():
    assert classify("STANDARD VERSION (fallback)") is Role.BANNER_HEADING


def test_metadata_labels():
    assert classify("Level: B1") is Role.METADATA
    assert classify("Output language: Spanish") is Role.METADATA
    assert classify("Dyslexia-friendly: yes") is Role.METADATA


def test_table_row_needs_two_pipes():
    assert classify("| a | b |") is Role.TABLE_ROW
    assert classify("|a") is Role.BODY
    assert classify("a | b | c") is Role.BODY


def test_blank_and_plain_lines_are_body():
    assert classify("") is Role.BODY
    assert classify("   ") is Role.BODY
    assert classify("Rivers carry water.") is Role.BODY
