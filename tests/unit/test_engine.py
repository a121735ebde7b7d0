import pytest

from aontas.core.engine import ExportEngine, suggest_filename
from aontas.core.errors import ExportFailedError, UnsupportedFormatError
from aontas.core.composer import compose
from aontas.grading.exercises import Mode
from aontas.plugins.registry import RendererRegistry


def test_registry_formats():
    assert RendererRegistry.available_formats() == ["docx", "pdf", "txt"]
    assert RendererRegistry.get(".PDF") is not None
    assert RendererRegistry.get("html") is None


def test_unsupported_format():
    with pytest.raises(UnsupportedFormatError):
        ExportEngine.render(compose(["x"]), "odt")


def test_renderer_failure_is_wrapped():
    with pytest.raises(ExportFailedError):
        ExportEngine.render(compose(["x"]), "pdf", {"font_path": "/nonexistent/font.ttf"})


def test_suggest_filename():
    assert suggest_filename("aontas10", ["informal  email", "B2"], "txt") == "aontas10-informal-email-b2.txt"
    assert suggest_filename("aontas10", ["", "A1"], ".PDF") == "aontas10-a1.pdf"


def test_export_texts_many_formats(export_context):
    artifacts = ExportEngine.export_texts("Standard body.", "Adapted body.", export_context, ["txt", "pdf", "docx"])
    assert [a.filename for a in artifacts] == [
        "aontas10-blog-post-b1.txt",
        "aontas10-blog-post-b1.pdf",
        "aontas10-blog-post-b1.docx",
    ]
    text = artifacts[0].content.decode("utf-8")
    assert text.startswith("Aontas-10 export\nOutput language: English\nLevel: B1")
    assert "Dyslexia-friendly: yes" in text
    assert "Reading text (STANDARD version)" in text
    assert text.index("Standard body.") < text.index("Reading text (ADAPTED version)") < text.index("Adapted body.")
    assert artifacts[1].media_type == "application/pdf"


def test_export_worksheets(sample_items, export_context):
    artifacts = ExportEngine.export_worksheets(sample_items, Mode.ADAPTED, export_context, ["txt"])
    names = [a.filename for a in artifacts]
    assert names == ["aontas10-worksheet-adapted-blog-post-b1.txt", "aontas10-key-blog-post-b1.txt"]

    sheet = artifacts[0].content.decode("utf-8")
    assert sheet.startswith("Student worksheet (ADAPTED version)")
    assert "1. Choose the topic." in sheet
    assert "   B) Cars" in sheet

    key = artifacts[1].content.decode("utf-8")
    assert "2. [cloze / cloze with word bank] fast / slow" in key
    assert "4. [ordering / event ordering] rain / flood (teacher-checked)" in key
