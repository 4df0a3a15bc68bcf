"""Block tree produced by the template renderer and consumed by the serializer.

Units match WordprocessingML: twips for spacing/indent/page size, half-points
for font size, eighth-points for border width, pixels for image display size.
"""
from typing import Literal

from pydantic import BaseModel, Field

BlockKind = Literal[
    "logo", "title", "subtitle", "rule", "author",
    "heading", "body", "bullet", "spacer",
    "header", "footer",
]


class Border(BaseModel):
    side: Literal["top", "bottom", "left", "right"]
    style: str = "single"
    size: int  # eighth-points
    color: str
    space: int  # points


class ParagraphSpacing(BaseModel):
    before: int | None = None
    after: int | None = None
    line: int | None = None  # 240 = single line


class TextRun(BaseModel):
    text: str
    font: str
    size: int
    color: str
    bold: bool = False
    italic: bool = False
    character_spacing: int | None = None  # twips


class ImageRun(BaseModel):
    data: bytes = Field(repr=False)
    width: int   # px
    height: int  # px
    image_type: str = "png"


class BulletRef(BaseModel):
    reference: str
    level: int = 0


class Block(BaseModel):
    kind: BlockKind
    alignment: Literal["left", "center", "right"] | None = None
    spacing: ParagraphSpacing = Field(default_factory=ParagraphSpacing)
    runs: list[TextRun] = Field(default_factory=list)
    image: ImageRun | None = None
    borders: list[Border] = Field(default_factory=list)
    indent_left: int | None = None
    keep_next: bool = False
    keep_lines: bool = False
    widow_control: bool = False
    bullet: BulletRef | None = None

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)


class BulletListDefinition(BaseModel):
    """Single-level bullet list shared by every bullet paragraph in the document."""
    reference: str = "mainBullets"
    level: int = 0
    text: str = "•"
    indent_left: int = 720
    hanging: int = 360


class PageSetup(BaseModel):
    width: int
    height: int
    margin_top: int
    margin_right: int
    margin_bottom: int
    margin_left: int


class DocumentPlan(BaseModel):
    page: PageSetup
    default_font: str
    default_size: int
    numbering: BulletListDefinition = Field(default_factory=BulletListDefinition)
    header: Block
    footer: Block
    blocks: list[Block] = Field(default_factory=list)

    def kinds(self) -> list[str]:
        """Ordered block kinds of the body — handy for structural checks."""
        return [b.kind for b in self.blocks]
