"""Assemble a letter and its annexes into a paginated PDF."""

import logging
from dataclasses import replace
from typing import Optional

from .annexes import draw_info_sheet_page, draw_reply_form_page
from .blocks import (
    draw_sender_block, draw_date_line, draw_recipient_block, draw_reference_line,
    draw_salutation, draw_body_paragraphs, draw_table, draw_closing_block,
    draw_enclosures,
)
from .config import LayoutConfig, DEFAULT_LETTER_LAYOUT
from .content import LetterContent, LetterType
from .document import Document, DocumentMetadata, TextRun, RGB
from .errors import MissingAnnexError
from .fonts import FontMetrics, FontRole
from .layout_engine import PageManager
from .paragraphs import BulletList, HeadingParagraph, PlainParagraph
from .pdf_renderer import PDFRenderer

logger = logging.getLogger(__name__)


PAGE_NUMBER_FONT_SIZE = 9
PAGE_NUMBER_Y = 30  # from the bottom edge of the page
PAGE_NUMBER_COLOR: RGB = (0.4, 0.4, 0.4)

CREATOR = "ClaimCraft UK"
PRODUCER = "ClaimCraft UK - Debt Recovery Assistant"

LETTER_DOCUMENT_TYPES = (
    LetterType.LBA,
    LetterType.POLITE_CHASER,
    LetterType.INSTALMENT_AGREEMENT,
    LetterType.PART_36_OFFER,
)

# PDF size estimate, in bytes
BASE_PDF_SIZE = 30000
PER_PAGE_PDF_SIZE = 15000


def is_letter_document(document_type: LetterType) -> bool:
    """Whether this document type is laid out as a letter."""
    return document_type in LETTER_DOCUMENT_TYPES


def document_title(content: LetterContent) -> str:
    if content.document_type == LetterType.LBA:
        return f"Letter Before Action - {content.invoice_number or 'Claim'}"
    if content.document_type == LetterType.POLITE_CHASER:
        return f"Payment Reminder - {content.invoice_number or 'Invoice'}"
    return f"Legal Document - {content.invoice_number or 'Claim'}"


def default_metadata(content: LetterContent) -> DocumentMetadata:
    return DocumentMetadata(
        title=document_title(content),
        subject=f"Invoice: {content.invoice_number or 'N/A'}",
        creator=CREATOR,
        producer=PRODUCER,
    )


def check_annexes(content: LetterContent) -> None:
    """Fail before any layout when a requested annex has no content."""
    if content.include_info_sheet and content.info_sheet is None:
        raise MissingAnnexError("include_info_sheet is set but no info_sheet content was given")
    if content.include_reply_form and content.reply_form is None:
        raise MissingAnnexError("include_reply_form is set but no reply_form content was given")


def render_main_letter(pm: PageManager, content: LetterContent) -> None:
    """Draw the letter itself, from sender block to enclosures."""
    draw_sender_block(pm, content.sender)
    draw_date_line(pm, content.date)
    draw_recipient_block(pm, content.recipient)
    draw_reference_line(pm, content.reference)
    draw_salutation(pm, content.salutation)
    draw_body_paragraphs(pm, content.body_paragraphs)
    draw_table(pm, content.table)
    draw_closing_block(
        pm,
        closing=content.closing,
        signer_name=content.signer_name,
        signer_title=content.signer_title,
        signature_image=content.signature_image,
    )
    draw_enclosures(pm, content.enclosures)


def add_page_numbers(document: Document, fonts: FontMetrics) -> None:
    """
    Draw a centered "Page X of Y" footer on every page.

    Runs once all content is placed, since the total is only known then.
    """
    total_pages = document.page_count
    font_name = fonts.font_name(FontRole.REGULAR)

    for page in document.pages:
        text = f"Page {page.index + 1} of {total_pages}"
        width = fonts.width(text, PAGE_NUMBER_FONT_SIZE)
        page.add(TextRun(
            text=text,
            x=(page.width - width) / 2,
            y=PAGE_NUMBER_Y,
            font_name=font_name,
            font_size=PAGE_NUMBER_FONT_SIZE,
            width=width,
            color=PAGE_NUMBER_COLOR,
        ))


def layout(
    content: LetterContent,
    config: Optional[LayoutConfig] = None,
    metadata: Optional[DocumentMetadata] = None,
) -> Document:
    """
    Lay out a letter and any requested annexes into a numbered Document.

    Raises MissingAnnexError when an annex is requested without content.
    """
    check_annexes(content)
    config = config or DEFAULT_LETTER_LAYOUT

    fonts = FontMetrics().init_fonts()
    document = Document(metadata=metadata or default_metadata(content))
    pm = PageManager(fonts, config, document)

    render_main_letter(pm, content)
    letter_pages = document.page_count

    if content.include_info_sheet:
        draw_info_sheet_page(pm, content.info_sheet)
    if content.include_reply_form:
        draw_reply_form_page(pm, content.reply_form)

    add_page_numbers(document, fonts)
    logger.info(
        "Laid out %s: %d letter page(s), %d page(s) in total",
        document.metadata.title or "letter", letter_pages, document.page_count,
    )
    return document


def render(
    content: LetterContent,
    config: Optional[LayoutConfig] = None,
    metadata: Optional[DocumentMetadata] = None,
) -> bytes:
    """Lay out the letter and return it as PDF bytes."""
    return PDFRenderer().render(layout(content, config, metadata))


def render_main_letter_only(
    content: LetterContent,
    config: Optional[LayoutConfig] = None,
) -> bytes:
    """Render the letter without its annexes."""
    letter_only = replace(content, include_info_sheet=False, include_reply_form=False)
    return render(letter_only, config)


def layout_info_sheet(content: LetterContent, config: Optional[LayoutConfig] = None) -> Document:
    """Lay out the information sheet annex as a document of its own."""
    if content.info_sheet is None:
        raise MissingAnnexError("Info sheet content not available")

    fonts = FontMetrics().init_fonts()
    document = Document(metadata=DocumentMetadata(
        title="Information Sheet - Annex 1", creator=CREATOR, producer=PRODUCER,
    ))
    pm = PageManager(fonts, config, document, start_page=False)
    draw_info_sheet_page(pm, content.info_sheet)
    add_page_numbers(document, fonts)
    return document


def layout_reply_form(content: LetterContent, config: Optional[LayoutConfig] = None) -> Document:
    """Lay out the reply form annex as a document of its own."""
    if content.reply_form is None:
        raise MissingAnnexError("Reply form content not available")

    fonts = FontMetrics().init_fonts()
    document = Document(metadata=DocumentMetadata(
        title="Reply Form - Annex 2", creator=CREATOR, producer=PRODUCER,
    ))
    pm = PageManager(fonts, config, document, start_page=False)
    draw_reply_form_page(pm, content.reply_form)
    add_page_numbers(document, fonts)
    return document


def render_info_sheet(content: LetterContent, config: Optional[LayoutConfig] = None) -> bytes:
    return PDFRenderer().render(layout_info_sheet(content, config))


def render_reply_form(content: LetterContent, config: Optional[LayoutConfig] = None) -> bytes:
    return PDFRenderer().render(layout_reply_form(content, config))


def estimate_pdf_size(content: LetterContent) -> int:
    """Rough size of the rendered PDF in bytes, for progress feedback."""
    pages = 1

    text_length = 0
    for para in content.body_paragraphs:
        if isinstance(para, BulletList):
            text_length += sum(len(item) for item in para.items)
        elif isinstance(para, (HeadingParagraph, PlainParagraph)):
            text_length += len(para.text)
    if text_length > 3000:
        pages += 1
    if text_length > 6000:
        pages += 1

    if content.include_info_sheet:
        pages += 1
    if content.include_reply_form:
        pages += 1

    return BASE_PDF_SIZE + pages * PER_PAGE_PDF_SIZE
