"""Stage 2: Assemble — map article content onto a styled block tree.

``render()`` is a pure transform from (content, tokens, geometry, logo) to a
DocumentPlan; it does no I/O. ``run()`` wires it to the settings: it loads
the logo from disk first so a missing logo aborts before any block is built.

Block order:
  logo → title → subtitle → red rule → "by {author}"
  then per section:
  heading → paragraphs → bullets → spacer + after → bullets2 → spacer + after2
"""
import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, Field

from models.content import Content, Paragraph, Section
from models.design import DesignTokens, PageGeometry, get_preset
from models.document_plan import (
    Block,
    Border,
    BulletListDefinition,
    BulletRef,
    DocumentPlan,
    ImageRun,
    PageSetup,
    ParagraphSpacing,
    TextRun,
)
from settings import Settings

logger = logging.getLogger(__name__)

_HEADER_LABEL = "SKYETRAIN"
_FOOTER_LABEL = "skyetrain.com"

_TITLE_CHARACTER_SPACING = 80
_HEADER_CHARACTER_SPACING = 60
_SPACER_AFTER = 60
_HEADING_INDENT = 240


class LogoImage(BaseModel):
    data: bytes = Field(repr=False)
    image_type: str
    width: int   # native px
    height: int  # native px


def run(settings: Settings, content: Content, tokens: DesignTokens) -> DocumentPlan:
    """Load the logo and render the configured preset.

    Returns the completed DocumentPlan.
    """
    geometry = get_preset(settings.preset)
    logo = load_logo(settings.logo_path)
    plan = render(content, tokens, geometry, logo)

    logger.info("Stage 2 complete → %d blocks (%s preset)", len(plan.blocks), geometry.name)
    logger.info("  Logo:     %dx%d px", geometry.logo_width, geometry.logo_height)
    logger.info("  Bullets:  %d", plan.kinds().count("bullet"))
    return plan


def load_logo(path: Path) -> LogoImage:
    """Read the logo file and identify its format.

    Raises FileNotFoundError if the file is missing and ValueError if it is
    not an image Pillow can read.
    """
    if not path.exists():
        logger.error("Logo not found: %s", path)
        raise FileNotFoundError(f"Logo not found: {path}")
    data = path.read_bytes()
    try:
        with Image.open(io.BytesIO(data)) as img:
            image_type = (img.format or "png").lower()
            width, height = img.size
    except UnidentifiedImageError as exc:
        raise ValueError(f"Logo is not a readable image: {path}") from exc
    logger.debug("Loaded logo %s (%s, %dx%d)", path, image_type, width, height)
    return LogoImage(data=data, image_type=image_type, width=width, height=height)


def render(
    content: Content,
    tokens: DesignTokens,
    geometry: PageGeometry,
    logo: LogoImage,
) -> DocumentPlan:
    """Build the full block tree for one article in one page preset."""
    numbering = BulletListDefinition()

    blocks = _title_block(content, tokens, geometry, logo)
    for section in content.sections:
        blocks.extend(_section_blocks(section, tokens, numbering))

    return DocumentPlan(
        page=PageSetup(
            width=geometry.width,
            height=geometry.height,
            margin_top=geometry.margin_top,
            margin_right=geometry.margin_right,
            margin_bottom=geometry.margin_bottom,
            margin_left=geometry.margin_left,
        ),
        default_font=tokens.fonts.body,
        default_size=tokens.sizes.body,
        numbering=numbering,
        header=_header(tokens),
        footer=_footer(tokens),
        blocks=blocks,
    )


# ---------------------------------------------------------------------------
# Title block
# ---------------------------------------------------------------------------

def _title_block(
    content: Content,
    tokens: DesignTokens,
    geometry: PageGeometry,
    logo: LogoImage,
) -> list[Block]:
    spacing = geometry.title_block
    return [
        Block(
            kind="logo",
            alignment="center",
            spacing=ParagraphSpacing(before=spacing.logo_before, after=spacing.logo_after),
            image=ImageRun(
                data=logo.data,
                width=geometry.logo_width,
                height=geometry.logo_height,
                image_type=logo.image_type,
            ),
        ),
        Block(
            kind="title",
            alignment="center",
            spacing=ParagraphSpacing(before=spacing.title_before, after=spacing.title_after),
            runs=[TextRun(
                text=content.title,
                font=tokens.fonts.heading,
                size=tokens.sizes.title,
                color=tokens.palette.heading,
                bold=True,
                character_spacing=_TITLE_CHARACTER_SPACING,
            )],
        ),
        Block(
            kind="subtitle",
            alignment="center",
            spacing=ParagraphSpacing(after=spacing.subtitle_after),
            runs=[TextRun(
                text=content.subtitle,
                font=tokens.fonts.body,
                size=tokens.sizes.subtitle,
                color=tokens.palette.subtitle,
                italic=True,
            )],
        ),
        # Red accent line closes the title block
        Block(
            kind="rule",
            spacing=ParagraphSpacing(after=spacing.rule_after),
            borders=[Border(side="bottom", size=6, color=tokens.palette.accent_red, space=1)],
        ),
        Block(
            kind="author",
            alignment="right",
            spacing=ParagraphSpacing(after=spacing.author_after),
            runs=[TextRun(
                text=f"by {content.author}",
                font=tokens.fonts.body,
                size=tokens.sizes.subtitle,
                color=tokens.palette.subtitle,
            )],
        ),
    ]


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def _section_blocks(
    section: Section,
    tokens: DesignTokens,
    numbering: BulletListDefinition,
) -> list[Block]:
    parts = [_section_heading(section.heading, tokens)]
    parts.extend(_body_paragraph(p, tokens) for p in section.paragraphs)
    if section.bullets is not None:
        parts.extend(_bullet(b, tokens, numbering) for b in section.bullets)
    if section.after is not None:
        parts.append(_spacer(_SPACER_AFTER))
        parts.extend(_body_paragraph(p, tokens) for p in section.after)
    if section.bullets2 is not None:
        parts.extend(_bullet(b, tokens, numbering) for b in section.bullets2)
    if section.after2 is not None:
        parts.append(_spacer(_SPACER_AFTER))
        parts.extend(_body_paragraph(p, tokens) for p in section.after2)
    return parts


def _runs(spans: Paragraph, tokens: DesignTokens) -> list[TextRun]:
    # Bold spans switch to the heading face; colour and size never vary.
    return [
        TextRun(
            text=s.text,
            font=tokens.fonts.heading if s.bold else tokens.fonts.body,
            size=tokens.sizes.body,
            color=tokens.palette.text,
            bold=s.bold,
            italic=s.italic,
        )
        for s in spans
    ]


def _body_paragraph(spans: Paragraph, tokens: DesignTokens) -> Block:
    return Block(
        kind="body",
        spacing=ParagraphSpacing(after=tokens.spacing.body_after, line=tokens.spacing.body_line),
        widow_control=True,
        runs=_runs(spans, tokens),
    )


def _bullet(text: str, tokens: DesignTokens, numbering: BulletListDefinition) -> Block:
    return Block(
        kind="bullet",
        bullet=BulletRef(reference=numbering.reference, level=numbering.level),
        spacing=ParagraphSpacing(after=tokens.spacing.bullet_after, line=tokens.spacing.body_line),
        runs=[TextRun(
            text=text,
            font=tokens.fonts.body,
            size=tokens.sizes.body,
            color=tokens.palette.text,
        )],
    )


def _section_heading(text: str, tokens: DesignTokens) -> Block:
    return Block(
        kind="heading",
        spacing=ParagraphSpacing(
            before=tokens.spacing.section_before,
            after=tokens.spacing.section_after,
        ),
        keep_next=True,
        keep_lines=True,
        borders=[Border(side="left", size=14, color=tokens.palette.accent_blue, space=10)],
        indent_left=_HEADING_INDENT,
        runs=[TextRun(
            text=text,
            font=tokens.fonts.heading,
            size=tokens.sizes.heading,
            color=tokens.palette.heading,
            bold=True,
        )],
    )


def _spacer(after: int) -> Block:
    return Block(kind="spacer", spacing=ParagraphSpacing(after=after))


# ---------------------------------------------------------------------------
# Header / footer
# ---------------------------------------------------------------------------

def _header(tokens: DesignTokens) -> Block:
    return Block(
        kind="header",
        alignment="right",
        spacing=ParagraphSpacing(after=80),
        borders=[Border(side="bottom", size=6, color=tokens.palette.accent_blue, space=6)],
        runs=[TextRun(
            text=_HEADER_LABEL,
            font=tokens.fonts.heading,
            size=tokens.sizes.meta,
            color=tokens.palette.meta,
            character_spacing=_HEADER_CHARACTER_SPACING,
        )],
    )


def _footer(tokens: DesignTokens) -> Block:
    return Block(
        kind="footer",
        alignment="center",
        borders=[Border(side="top", size=6, color=tokens.palette.accent_blue, space=6)],
        runs=[TextRun(
            text=_FOOTER_LABEL,
            font=tokens.fonts.body,
            size=tokens.sizes.meta,
            color=tokens.palette.meta,
            italic=True,
        )],
    )
