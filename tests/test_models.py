"""Validation tests for the content and block-tree models."""
import pytest
from pydantic import ValidationError

from models.content import PLACEHOLDER_CONTENT, Content, Section, Span
from models.document_plan import Block, BulletListDefinition, TextRun


# ---------------------------------------------------------------------------
# Span
# ---------------------------------------------------------------------------

class TestSpan:
    def test_defaults(self):
        s = Span(text="hello")
        assert s.bold is False
        assert s.italic is False

    def test_italics_alias(self):
        s = Span.model_validate({"text": "x", "italics": True})
        assert s.italic is True

    def test_bold_and_italic_kept_independently(self):
        s = Span(text="x", bold=True, italic=True)
        assert s.bold and s.italic

    def test_text_must_be_string(self):
        with pytest.raises(ValidationError):
            Span(text=None)


# ---------------------------------------------------------------------------
# Section normalization
# ---------------------------------------------------------------------------

class TestSectionNormalization:
    def test_string_paragraph_becomes_single_span(self):
        sec = Section(heading="H", paragraphs=["Just text."])
        assert sec.paragraphs == [[Span(text="Just text.")]]

    def test_string_spans_inside_paragraph(self):
        sec = Section(heading="H", paragraphs=[["a", {"text": "b", "bold": True}]])
        assert sec.paragraphs[0] == [Span(text="a"), Span(text="b", bold=True)]

    def test_single_span_dict_paragraph(self):
        sec = Section(heading="H", paragraphs=[{"text": "solo", "italics": True}])
        assert sec.paragraphs == [[Span(text="solo", italic=True)]]

    def test_after_lists_are_normalized(self):
        sec = Section(heading="H", after=["one"], after2=[["two", "three"]])
        assert sec.after == [[Span(text="one")]]
        assert sec.after2 == [[Span(text="two"), Span(text="three")]]

    def test_optional_lists_default_to_none(self):
        sec = Section(heading="H")
        assert sec.paragraphs == []
        assert sec.bullets is None
        assert sec.after is None
        assert sec.bullets2 is None
        assert sec.after2 is None

    def test_missing_heading_raises(self):
        with pytest.raises(ValidationError):
            Section(paragraphs=["x"])


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

class TestContent:
    def test_sections_may_be_empty(self):
        c = Content(title="T", subtitle="S", author="A")
        assert c.sections == []

    def test_frozen(self):
        c = Content(title="T", subtitle="S", author="A")
        with pytest.raises(ValidationError):
            c.title = "other"

    def test_load_fixture(self, sample_content):
        assert sample_content.title == "TRAINING THROUGH A DELOAD"
        assert len(sample_content.sections) == 2
        second = sample_content.sections[1]
        assert second.paragraphs[0][0].italic is True
        assert second.bullets == ["Bar speed falling across sessions", "Sleep quality slipping"]

    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Content.load(tmp_path / "missing.yaml")

    def test_load_malformed_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("title: T\nsections: []\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            Content.load(path)

    def test_placeholder(self):
        assert PLACEHOLDER_CONTENT.title == "ARTICLE TITLE HERE"
        assert PLACEHOLDER_CONTENT.sections[0].paragraphs == [[Span(text="First paragraph content.")]]


# ---------------------------------------------------------------------------
# Block tree
# ---------------------------------------------------------------------------

class TestBlock:
    def test_text_joins_runs(self):
        b = Block(kind="body", runs=[
            TextRun(text="a", font="Georgia", size=22, color="3A3A3A"),
            TextRun(text="b", font="Arial", size=22, color="3A3A3A", bold=True),
        ])
        assert b.text == "ab"

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            Block(kind="table")

    def test_bullet_definition_defaults(self):
        d = BulletListDefinition()
        assert d.reference == "mainBullets"
        assert d.text == "•"
        assert (d.indent_left, d.hanging) == (720, 360)
