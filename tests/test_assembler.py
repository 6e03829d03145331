import re
from dataclasses import replace

import pytest

from conftest import make_letter
from letter_layout.assembler import (
    PAGE_NUMBER_Y, document_title, estimate_pdf_size, is_letter_document, layout,
    layout_info_sheet, layout_reply_form, render, render_info_sheet, render_main_letter_only,
    render_reply_form,
)
from letter_layout.content import AddressBlock, LetterType, TableRow
from letter_layout.document import DocumentMetadata, TextRun
from letter_layout.errors import MissingAnnexError
from letter_layout.paragraphs import BulletList, HeadingParagraph, PlainParagraph

PAGE_FOOTER = re.compile(r"^Page (\d+) of (\d+)$")


def footers(page):
    return [run for run in page.text_runs if PAGE_FOOTER.match(run.text)]


def content_primitives(document):
    """Everything except the page number footers."""
    for page in document.pages:
        for primitive in page.primitives:
            if isinstance(primitive, TextRun) and PAGE_FOOTER.match(primitive.text):
                continue
            yield page, primitive


def test_short_letter_fits_on_one_page(fake):
    forty_words = " ".join(fake.words(nb=40))
    content = make_letter(
        recipient=AddressBlock(name="Widget Traders Ltd", lines=("22 Mill Lane", "York", "YO1 7HH")),
        body_paragraphs=(PlainParagraph(forty_words),),
        table=(TableRow("Principal:", "£900.00"), TableRow("Total:", "£1,000.00", bold=True)),
    )

    document = layout(content)

    assert document.page_count == 1
    assert [run.text for run in footers(document.pages[0])] == ["Page 1 of 1"]


def test_very_long_paragraph_spans_pages(config, fake):
    content = make_letter(body_paragraphs=(PlainParagraph(" ".join(fake.words(nb=2000))),))

    document = layout(content)

    assert document.page_count >= 2
    body_runs = [
        run for run in document.pages[0].text_runs
        if run.font_name == "Times-Roman" and run.x == config.margin_left
    ]
    last_line = body_runs[-1]
    assert last_line.x + last_line.width <= config.margin_left + config.content_width
    assert last_line.y >= config.margin_bottom


def test_nothing_is_drawn_below_the_bottom_margin(config, sample_generator):
    content = sample_generator.letter_before_action(paragraphs=12)
    document = layout(content)

    assert document.page_count >= 3
    for page, primitive in content_primitives(document):
        assert primitive.bottom >= config.margin_bottom, (page.index, primitive)


def test_every_page_gets_exactly_one_footer(sample_generator, config):
    document = layout(sample_generator.letter_before_action(paragraphs=10))
    total = document.page_count

    for page in document.pages:
        page_footers = footers(page)
        assert len(page_footers) == 1
        footer = page_footers[0]
        assert footer.text == f"Page {page.index + 1} of {total}"
        assert footer.y == PAGE_NUMBER_Y
        assert footer.x == pytest.approx((config.page_width - footer.width) / 2)
        # Numbering is the final pass
        assert page.primitives[-1] is footer


def test_annexes_start_on_fresh_pages(sample_generator):
    document = layout(sample_generator.letter_before_action())
    titles = {page.texts()[0]: page.index for page in document.pages}

    info_page = titles["INFORMATION SHEET"]
    reply_page = titles["REPLY FORM"]
    assert info_page > 0
    assert reply_page > info_page
    # The letter's last content sits on the page before the info sheet
    letter_texts = [t for page in document.pages[:info_page] for t in page.texts()]
    assert any("Annex 2" in t for t in letter_texts)
    assert not any("Annex 2" in t for t in document.pages[info_page].texts())


def test_annex_flags_control_annex_pages(sample_generator):
    content = sample_generator.letter_before_action()
    full = layout(content)
    only_info = layout(replace(content, include_reply_form=False))
    neither = layout(replace(content, include_info_sheet=False, include_reply_form=False))

    def all_texts(document):
        return [t for page in document.pages for t in page.texts()]

    assert "REPLY FORM" in all_texts(full)
    assert "INFORMATION SHEET" in all_texts(only_info)
    assert "REPLY FORM" not in all_texts(only_info)
    assert "INFORMATION SHEET" not in all_texts(neither)
    assert neither.page_count < only_info.page_count < full.page_count


@pytest.mark.parametrize("flags", [
    {"include_info_sheet": True},
    {"include_reply_form": True},
])
def test_requested_annex_without_content_fails_fast(flags):
    with pytest.raises(MissingAnnexError):
        layout(make_letter(**flags))


def test_render_returns_pdf_bytes(sample_generator):
    pdf = render(sample_generator.letter_before_action())
    assert pdf.startswith(b"%PDF")
    assert b"%%EOF" in pdf[-32:]


def test_render_main_letter_only_drops_annexes(sample_generator):
    content = sample_generator.letter_before_action()
    assert len(render_main_letter_only(content)) < len(render(content))


def test_single_annex_documents_have_no_blank_first_page(sample_generator):
    content = sample_generator.letter_before_action()

    info = layout_info_sheet(content)
    reply = layout_reply_form(content)

    assert info.page_count == 1
    assert info.pages[0].texts()[0] == "INFORMATION SHEET"
    assert info.metadata.title == "Information Sheet - Annex 1"
    assert reply.pages[0].texts()[0] == "REPLY FORM"
    assert reply.metadata.title == "Reply Form - Annex 2"
    assert render_info_sheet(content).startswith(b"%PDF")
    assert render_reply_form(content).startswith(b"%PDF")


def test_single_annex_requires_its_content(letter):
    with pytest.raises(MissingAnnexError):
        layout_info_sheet(letter)
    with pytest.raises(MissingAnnexError):
        layout_reply_form(letter)


def test_default_metadata():
    content = make_letter(document_type=LetterType.LBA, invoice_number="INV-42")
    document = layout(content)
    assert document.metadata.title == "Letter Before Action - INV-42"
    assert document.metadata.subject == "Invoice: INV-42"
    assert document.metadata.creator == "ClaimCraft UK"


def test_caller_metadata_is_used(letter):
    metadata = DocumentMetadata(title="Custom", subject="Subject", creator="Tests")
    document = layout(letter, metadata=metadata)
    assert document.metadata is metadata
    assert b"Custom" in render(letter, metadata=metadata)


@pytest.mark.parametrize("document_type, invoice, expected", [
    (LetterType.LBA, None, "Letter Before Action - Claim"),
    (LetterType.POLITE_CHASER, "INV-7", "Payment Reminder - INV-7"),
    (LetterType.POLITE_CHASER, None, "Payment Reminder - Invoice"),
    (LetterType.PART_36_OFFER, "INV-7", "Legal Document - INV-7"),
])
def test_document_title(document_type, invoice, expected):
    content = make_letter(document_type=document_type, invoice_number=invoice)
    assert document_title(content) == expected


def test_is_letter_document():
    assert is_letter_document(LetterType.LBA)
    assert is_letter_document(LetterType.PART_36_OFFER)
    assert not is_letter_document(LetterType.OTHER)


def test_estimate_pdf_size(sample_generator, fake):
    short = make_letter()
    assert estimate_pdf_size(short) == 30000 + 15000

    long_letter = make_letter(body_paragraphs=(PlainParagraph("x" * 6001),))
    assert estimate_pdf_size(long_letter) == 30000 + 3 * 15000

    lba = sample_generator.letter_before_action(paragraphs=2)
    assert estimate_pdf_size(lba) == 30000 + 3 * 15000


def test_layout_is_deterministic(letter):
    first = layout(letter)
    second = layout(letter)
    assert [p.primitives for p in first.pages] == [p.primitives for p in second.pages]


def test_estimate_pdf_size_counts_headings_and_bullet_items():
    bullets = make_letter(body_paragraphs=(BulletList(items=("y" * 2000, "y" * 2000)),))
    assert estimate_pdf_size(bullets) == 30000 + 2 * 15000

    headed = make_letter(body_paragraphs=(
        HeadingParagraph("h" * 1500),
        PlainParagraph("p" * 1600),
        BulletList(items=("b" * 3000,)),
    ))
    assert estimate_pdf_size(headed) == 30000 + 3 * 15000
