"""Stage 3: Write — serialize a DocumentPlan to .docx via python-docx.

Reads:  DocumentPlan from Stage 2
Writes: settings.resolved_output_path (overwritten on every run)

python-docx has no API for paragraph borders, bullet numbering definitions or
character spacing, so those are written as raw WordprocessingML. Elements are
inserted in schema order; Word rejects a pPr/rPr whose children are out of
sequence.
"""
import io
import logging
from pathlib import Path

from docx import Document
from docx.document import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement, parse_xml
from docx.oxml.ns import nsdecls, qn
from docx.shared import Emu, Pt, RGBColor, Twips
from docx.text.paragraph import Paragraph as DocxParagraph
from docx.text.run import Run

from models.document_plan import Block, Border, BulletListDefinition, DocumentPlan, TextRun
from settings import Settings

logger = logging.getLogger(__name__)

_EMU_PER_PIXEL = 9525
_TWIPS_PER_LINE = 240

_ALIGNMENT = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
}

# pPr children that must follow <w:pBdr>
_PBDR_SUCCESSORS = (
    "w:shd", "w:tabs", "w:suppressAutoHyphens", "w:kinsoku", "w:wordWrap",
    "w:overflowPunct", "w:topLinePunct", "w:autoSpaceDE", "w:autoSpaceDN",
    "w:bidi", "w:adjustRightInd", "w:snapToGrid", "w:spacing", "w:ind",
    "w:contextualSpacing", "w:mirrorIndents", "w:suppressOverlap", "w:jc",
    "w:textDirection", "w:textAlignment", "w:textboxTightWrap",
    "w:outlineLvl", "w:divId", "w:cnfStyle", "w:rPr", "w:sectPr",
    "w:pPrChange",
)

# rPr children that must follow <w:spacing>
_RSPACING_SUCCESSORS = (
    "w:w", "w:kern", "w:position", "w:sz", "w:szCs", "w:highlight", "w:u",
    "w:effect", "w:bdr", "w:shd", "w:fitText", "w:vertAlign", "w:rtl",
    "w:cs", "w:em", "w:lang", "w:eastAsianLayout", "w:specVanish", "w:oMath",
)

# Order of border sides inside <w:pBdr>
_BORDER_ORDER = ("top", "left", "bottom", "right")


def run(settings: Settings, plan: DocumentPlan) -> Path:
    """Serialize the plan and write it to the configured output path.

    Returns the path of the written document.
    """
    output_path = settings.resolved_output_path
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = build_docx(plan)
    doc.save(str(output_path))

    logger.info("Stage 3 complete → %s", output_path)
    return output_path


def build_docx(plan: DocumentPlan) -> DocxDocument:
    """Build an in-memory python-docx Document from the plan."""
    doc = Document()
    _apply_defaults(doc, plan)
    _apply_page_setup(doc, plan)
    num_id = _add_bullet_numbering(doc, plan.numbering)
    num_ids = {plan.numbering.reference: num_id}

    _apply_header_footer(doc, plan, num_ids)

    # A fresh python-docx document starts with no body paragraphs
    for block in plan.blocks:
        _fill_paragraph(doc.add_paragraph(), block, num_ids)

    logger.debug("Built docx with %d body paragraphs", len(plan.blocks))
    return doc


# ---------------------------------------------------------------------------
# Document-level setup
# ---------------------------------------------------------------------------

def _apply_defaults(doc: DocxDocument, plan: DocumentPlan) -> None:
    normal = doc.styles["Normal"]
    normal.font.name = plan.default_font
    normal.font.size = Pt(plan.default_size / 2)


def _apply_page_setup(doc: DocxDocument, plan: DocumentPlan) -> None:
    page = plan.page
    for section in doc.sections:
        section.page_width = Twips(page.width)
        section.page_height = Twips(page.height)
        section.top_margin = Twips(page.margin_top)
        section.right_margin = Twips(page.margin_right)
        section.bottom_margin = Twips(page.margin_bottom)
        section.left_margin = Twips(page.margin_left)


def _add_bullet_numbering(doc: DocxDocument, definition: BulletListDefinition) -> int:
    """Register the shared bullet list definition and return its numId."""
    numbering_elem = doc.part.numbering_part.element

    abstract_ids = [
        int(an.get(qn("w:abstractNumId")))
        for an in numbering_elem.findall(qn("w:abstractNum"))
    ]
    num_ids = [int(n.get(qn("w:numId"))) for n in numbering_elem.findall(qn("w:num"))]
    abstract_id = max(abstract_ids, default=-1) + 1
    num_id = max(num_ids, default=0) + 1

    abstract_xml = (
        f'<w:abstractNum {nsdecls("w")} w:abstractNumId="{abstract_id}">'
        f'<w:multiLevelType w:val="singleLevel"/>'
        f'<w:lvl w:ilvl="{definition.level}">'
        f'<w:start w:val="1"/>'
        f'<w:numFmt w:val="bullet"/>'
        f'<w:lvlText w:val="{definition.text}"/>'
        f'<w:lvlJc w:val="left"/>'
        f'<w:pPr><w:ind w:left="{definition.indent_left}" w:hanging="{definition.hanging}"/></w:pPr>'
        f'</w:lvl>'
        f'</w:abstractNum>'
    )
    # abstractNum elements must precede every num element
    first_num = numbering_elem.find(qn("w:num"))
    if first_num is not None:
        first_num.addprevious(parse_xml(abstract_xml))
    else:
        numbering_elem.append(parse_xml(abstract_xml))

    num = parse_xml(
        f'<w:num {nsdecls("w")} w:numId="{num_id}">'
        f'<w:abstractNumId w:val="{abstract_id}"/>'
        f'</w:num>'
    )
    existing_nums = numbering_elem.findall(qn("w:num"))
    if existing_nums:
        existing_nums[-1].addnext(num)
    else:
        numbering_elem.append(num)
    logger.debug("Registered bullet list %r as numId %d", definition.reference, num_id)
    return num_id


def _apply_header_footer(doc: DocxDocument, plan: DocumentPlan, num_ids: dict[str, int]) -> None:
    for section in doc.sections:
        header = section.header
        header.is_linked_to_previous = False
        _fill_paragraph(header.paragraphs[0], plan.header, num_ids)

        footer = section.footer
        footer.is_linked_to_previous = False
        _fill_paragraph(footer.paragraphs[0], plan.footer, num_ids)


# ---------------------------------------------------------------------------
# Paragraphs
# ---------------------------------------------------------------------------

def _fill_paragraph(para: DocxParagraph, block: Block, num_ids: dict[str, int]) -> None:
    """Apply the block's paragraph properties and append its runs/image."""
    fmt = para.paragraph_format

    if block.bullet is not None:
        num_pr = para._p.get_or_add_pPr().get_or_add_numPr()
        num_pr.get_or_add_ilvl().val = block.bullet.level
        num_pr.get_or_add_numId().val = num_ids[block.bullet.reference]

    if block.borders:
        _add_borders(para, block.borders)

    if block.keep_next:
        fmt.keep_with_next = True
    if block.keep_lines:
        fmt.keep_together = True
    if block.widow_control:
        fmt.widow_control = True

    if block.spacing.before is not None:
        fmt.space_before = Twips(block.spacing.before)
    if block.spacing.after is not None:
        fmt.space_after = Twips(block.spacing.after)
    if block.spacing.line is not None:
        fmt.line_spacing = block.spacing.line / _TWIPS_PER_LINE

    if block.indent_left is not None:
        fmt.left_indent = Twips(block.indent_left)
    if block.alignment is not None:
        para.alignment = _ALIGNMENT[block.alignment]

    if block.image is not None:
        para.add_run().add_picture(
            io.BytesIO(block.image.data),
            width=Emu(block.image.width * _EMU_PER_PIXEL),
            height=Emu(block.image.height * _EMU_PER_PIXEL),
        )

    for text_run in block.runs:
        _add_run(para, text_run)


def _add_borders(para: DocxParagraph, borders: list[Border]) -> None:
    p_pr = para._p.get_or_add_pPr()
    p_bdr = OxmlElement("w:pBdr")
    for border in sorted(borders, key=lambda b: _BORDER_ORDER.index(b.side)):
        el = OxmlElement(f"w:{border.side}")
        el.set(qn("w:val"), border.style)
        el.set(qn("w:sz"), str(border.size))  # 1/8 pt units
        el.set(qn("w:space"), str(border.space))
        el.set(qn("w:color"), border.color)
        p_bdr.append(el)
    p_pr.insert_element_before(p_bdr, *_PBDR_SUCCESSORS)


def _add_run(para: DocxParagraph, text_run: TextRun) -> Run:
    run = para.add_run(text_run.text)
    run.font.name = text_run.font
    run.font.size = Pt(text_run.size / 2)
    run.font.color.rgb = RGBColor.from_string(text_run.color)
    if text_run.bold:
        run.bold = True
    if text_run.italic:
        run.italic = True
    if text_run.character_spacing is not None:
        r_pr = run._r.get_or_add_rPr()
        spacing = OxmlElement("w:spacing")
        spacing.set(qn("w:val"), str(text_run.character_spacing))
        r_pr.insert_element_before(spacing, *_RSPACING_SUCCESSORS)
    return run
