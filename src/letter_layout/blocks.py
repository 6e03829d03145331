"""Renderers for the blocks that make up the main letter.

Each function takes the PageManager for the document being built and
draws one block at the cursor, leaving the cursor below it.
"""

import logging
from typing import Optional, Sequence

from .content import AddressBlock, TableRow
from .fonts import FontRole, role_for
from .layout_engine import PageManager
from .paragraphs import BulletList, HeadingParagraph, Paragraph, PlainParagraph
from .signature import (
    SignatureDecodeError, SignatureImage, SignatureResult, decode_signature,
)

logger = logging.getLogger(__name__)


BULLET = "•"
BULLET_INDENT = 15

TABLE_LABEL_WIDTH = 180
TABLE_ROW_PADDING = 4
CURRENCY_PREFIXES = ("£", "$", "€")

# Blank space left for a handwritten signature, also used when the image fails
SIGNATURE_SPACE = 40
SIGNATURE_CLEARANCE = 10
SIGNATURE_GAP_AFTER = 5

ENCLOSURE_RULE_LENGTH = 100


def is_amount(value: str) -> bool:
    """Values starting with a currency symbol are treated as amounts."""
    return value.startswith(CURRENCY_PREFIXES)


def draw_address_block(pm: PageManager, address: AddressBlock, align: str = "left") -> None:
    """Name in bold, then contact name and address lines, one per line."""
    size = pm.config.font_size_body

    pm.draw_line_of_text(address.name, size, FontRole.BOLD, align=align)
    if address.contact_name:
        pm.draw_line_of_text(address.contact_name, size, align=align)
    for line in address.lines:
        pm.draw_line_of_text(line, size, align=align)

    pm.move_down(pm.config.paragraph_spacing)


def draw_sender_block(pm: PageManager, sender: AddressBlock) -> None:
    draw_address_block(pm, sender, align=pm.config.header_align)


def draw_recipient_block(pm: PageManager, recipient: AddressBlock) -> None:
    draw_address_block(pm, recipient, align="left")


def draw_date_line(pm: PageManager, date: str) -> None:
    pm.draw_line_of_text(date, align=pm.config.header_align)
    pm.move_down(pm.config.paragraph_spacing)


def draw_reference_line(pm: PageManager, reference: str) -> None:
    pm.draw_text_block(reference, role=FontRole.BOLD)
    pm.move_down(pm.config.paragraph_spacing)


def draw_salutation(pm: PageManager, salutation: str) -> None:
    pm.draw_line_of_text(salutation)
    pm.move_down(pm.config.paragraph_spacing)


def draw_heading(pm: PageManager, heading: HeadingParagraph) -> None:
    config = pm.config
    size = config.font_size_heading1 if heading.level == 1 else config.font_size_heading2

    # Keep a heading off the last line of a page
    pm.ensure_space(config.font_size_heading2 * 2)
    pm.move_down(config.paragraph_spacing / 2)
    pm.draw_text_block(heading.text, size, FontRole.BOLD)
    pm.move_down(config.paragraph_spacing / 2)


def draw_bullet_list(
    pm: PageManager,
    items: Sequence[str],
    font_size: Optional[float] = None,
    indent: float = BULLET_INDENT,
) -> None:
    """Bullet glyph at the margin with wrapped text on a hanging indent."""
    config = pm.config
    if font_size is None:
        font_size = config.font_size_body
    line_spacing = config.line_spacing(font_size)
    text_x = config.margin_left + indent

    for item in items:
        lines = pm.wrap(item, pm.content_width - indent, font_size)
        if not lines:
            continue

        pm.ensure_space(line_spacing)
        pm.draw_text(BULLET, font_size, x=config.margin_left)

        for line in lines:
            pm.ensure_space(line_spacing)
            pm.draw_text(line, font_size, x=text_x)
            pm.move_down(line_spacing)


def draw_body_paragraphs(pm: PageManager, paragraphs: Sequence[Paragraph]) -> None:
    """Draw paragraphs in document order, dispatching on paragraph kind."""
    spacing = pm.config.paragraph_spacing

    for para in paragraphs:
        if isinstance(para, HeadingParagraph):
            draw_heading(pm, para)
        elif isinstance(para, BulletList):
            if not para.items:
                continue
            draw_bullet_list(pm, para.items)
            pm.move_down(spacing / 2)
        elif isinstance(para, PlainParagraph):
            if not para.text:
                continue
            pm.draw_text_block(para.text, role=role_for(bold=para.bold))
            pm.move_down(spacing)
        else:
            raise TypeError(f"Unsupported paragraph type: {type(para).__name__}")


def draw_table(pm: PageManager, rows: Sequence[TableRow]) -> None:
    """
    Two-column label/value table.

    Labels start at the left margin. Amounts (values starting with a
    currency symbol) are right-aligned to the right margin; other values
    start at the fixed label column offset.
    """
    if not rows:
        return

    config = pm.config
    size = config.font_size_body
    row_pitch = config.line_spacing(size) + TABLE_ROW_PADDING
    value_x = config.margin_left + TABLE_LABEL_WIDTH

    for row in rows:
        pm.ensure_space(row_pitch)
        role = role_for(bold=row.bold)

        pm.draw_text(row.label, size, role, x=config.margin_left)
        if is_amount(row.value):
            pm.draw_text(row.value, size, role, align="right")
        else:
            pm.draw_text(row.value, size, role, x=value_x)

        pm.move_down(row_pitch)

    pm.move_down(config.paragraph_spacing / 2)


def draw_signature_image(pm: PageManager, image: SignatureImage) -> None:
    width, height = image.fit()
    pm.ensure_space(height + SIGNATURE_CLEARANCE)
    pm.draw_image(image.data, pm.config.margin_left, pm.y - height, width, height)
    pm.move_down(height + SIGNATURE_GAP_AFTER)


def draw_signature(pm: PageManager, signature: Optional[SignatureResult]) -> None:
    """Draw a decoded signature, or reserve blank space for a handwritten one."""
    if isinstance(signature, SignatureImage):
        draw_signature_image(pm, signature)
        return

    if isinstance(signature, SignatureDecodeError):
        logger.warning("Failed to embed signature image: %s", signature.reason)
    pm.move_down(SIGNATURE_SPACE)


def draw_closing_block(
    pm: PageManager,
    closing: str,
    signer_name: str,
    signer_title: Optional[str] = None,
    signature_image: Optional[str] = None,
) -> None:
    """Closing phrase, signature, signer name (bold) and optional title."""
    config = pm.config

    pm.draw_line_of_text(closing)
    pm.move_down(config.paragraph_spacing)

    signature = decode_signature(signature_image) if signature_image else None
    draw_signature(pm, signature)

    pm.draw_line_of_text(signer_name, role=FontRole.BOLD)
    if signer_title:
        pm.draw_line_of_text(signer_title)


def draw_enclosures(pm: PageManager, enclosures: Sequence[str]) -> None:
    """Short rule, bold "Enclosures:" label and a bullet per enclosure."""
    if not enclosures:
        return

    config = pm.config
    size = config.font_size_small
    spacing = config.paragraph_spacing

    # Keep the rule with the label
    pm.ensure_space(spacing * 2 + config.line_spacing(size))
    pm.move_down(spacing)
    pm.draw_line(
        config.margin_left, pm.y,
        config.margin_left + ENCLOSURE_RULE_LENGTH, pm.y,
        thickness=0.5,
    )
    pm.move_down(spacing)

    pm.draw_line_of_text("Enclosures:", size, FontRole.BOLD)
    for enclosure in enclosures:
        pm.draw_line_of_text(f"{BULLET} {enclosure}", size)
