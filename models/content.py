"""Article content model — the declarative input to the template renderer.

A paragraph is an ordered list of spans. Two shorthands are accepted on
input and normalized here, so the renderer only ever sees ``Span`` objects:

    "Plain paragraph text"             -> [Span(text="Plain paragraph text")]
    ["Plain span", {"text": "b", "bold": true}]
                                       -> [Span(text="Plain span"), Span(text="b", bold=True)]
"""
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Span(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    bold: bool = False
    italic: bool = Field(default=False, validation_alias=AliasChoices("italic", "italics"))


Paragraph = list[Span]


def _normalize_span(value: Any) -> Any:
    if isinstance(value, str):
        return {"text": value}
    return value


def _normalize_paragraph(value: Any) -> Any:
    if isinstance(value, (str, dict, Span)):
        value = [value]
    if isinstance(value, (list, tuple)):
        return [_normalize_span(s) for s in value]
    return value


def _normalize_paragraphs(value: Any) -> Any:
    if value is None:
        return value
    if isinstance(value, (list, tuple)):
        return [_normalize_paragraph(p) for p in value]
    return value


class Section(BaseModel):
    """A titled block of body paragraphs with up to two bullet lists.

    Rendered in a fixed order:
    heading → paragraphs → bullets → spacer + after → bullets2 → spacer + after2
    """
    model_config = ConfigDict(frozen=True)

    heading: str
    paragraphs: list[Paragraph] = Field(default_factory=list)
    bullets: list[str] | None = None
    after: list[Paragraph] | None = None
    bullets2: list[str] | None = None
    after2: list[Paragraph] | None = None

    @field_validator("paragraphs", "after", "after2", mode="before")
    @classmethod
    def normalize_paragraphs(cls, v: Any) -> Any:
        return _normalize_paragraphs(v)


class Content(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: str
    author: str
    sections: list[Section] = Field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> "Content":
        """Load an article from a YAML file.

        Raises FileNotFoundError if path does not exist.
        """
        import yaml  # lazy — only needed at load time
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls.model_validate(data)


# Skeleton article used when no content file is configured.
PLACEHOLDER_CONTENT = Content(
    title="ARTICLE TITLE HERE",
    subtitle="One-line description of the article",
    author="Skye Boyland",
    sections=[
        Section(
            heading="First section heading",
            paragraphs=["First paragraph content."],
        ),
    ],
)
