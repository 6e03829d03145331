import pytest

from letter_layout.annexes import (
    CHECKBOX_LABEL_INDENT, CHECKBOX_SIZE, DATE_LINE, HELP_HEADING, SIGNATURE_LINE,
    WARNING_BOX_HEIGHT, WARNING_TEXT_COLOR, draw_info_sheet_page, draw_reply_form_page,
    warning_box_height,
)
from letter_layout.content import (
    HelpOrganization, InfoSheetContent, ReplyFormContent, ReplyFormOption, ReplyFormSection,
)
from letter_layout.document import Rectangle
from letter_layout.layout_engine import PageManager
from letter_layout.sample import standard_info_sheet, standard_reply_form


def rects(page):
    return [p for p in page.primitives if isinstance(p, Rectangle)]


def test_info_sheet_starts_on_new_page_even_with_room(pm):
    pm.draw_line_of_text("Main letter text")
    draw_info_sheet_page(pm, standard_info_sheet())

    assert pm.document.page_count == 2
    assert pm.document.pages[0].texts() == ["Main letter text"]
    assert pm.document.pages[1].texts()[0] == "INFORMATION SHEET"


def test_info_sheet_layout(pm, config):
    draw_info_sheet_page(pm, standard_info_sheet())
    page = pm.page

    title = page.text_runs[0]
    assert title.font_size == config.font_size_heading1
    assert title.x == pytest.approx((config.page_width - title.width) / 2)

    # Box first, then the warning text inside it
    box = page.primitives[1]
    assert isinstance(box, Rectangle)
    assert box.height == WARNING_BOX_HEIGHT
    assert box.width == pytest.approx(config.content_width)
    assert box.fill_color is not None
    warning = page.primitives[2]
    assert warning.text.startswith("DO NOT IGNORE")
    assert warning.font_name == "Times-Bold"
    assert box.y < warning.y < box.y + box.height

    texts = page.texts()
    assert HELP_HEADING in texts
    assert "Citizens Advice" in texts
    assert "Phone: 0800 144 8848" in texts
    assert "Website: www.stepchange.org" in texts
    assert texts.index("Citizens Advice") < texts.index("StepChange Debt Charity")


def test_long_warning_stays_inside_its_box(pm, fake):
    info = InfoSheetContent(title="INFO", warning_text=fake.paragraph(nb_sentences=10))
    draw_info_sheet_page(pm, info)

    box = rects(pm.page)[0]
    warning_runs = [run for run in pm.page.text_runs if run.color == WARNING_TEXT_COLOR]
    assert len(warning_runs) > 2
    assert box.height > WARNING_BOX_HEIGHT
    assert all(box.y < run.y < box.y + box.height for run in warning_runs)


def heading_gap_below_box(page):
    box = rects(page)[-1]
    heading = next(run for run in page.text_runs if run.text == HELP_HEADING)
    return box.y - heading.y


@pytest.mark.parametrize("word_count", [10, 30, 60, 120])
def test_help_heading_sits_the_same_distance_below_any_warning_box(fonts, config, fake, word_count):
    pm = PageManager(fonts, config)
    warning = " ".join(fake.words(nb=word_count))
    draw_info_sheet_page(pm, InfoSheetContent(title="INFO", warning_text=warning))

    page = pm.document.pages[1]
    assert heading_gap_below_box(page) == pytest.approx(config.paragraph_spacing)


def test_warning_taller_than_a_page_is_split_into_boxes(pm, config, fake):
    warning = " ".join(fake.words(nb=600))
    draw_info_sheet_page(pm, InfoSheetContent(title="INFO", warning_text=warning))

    warning_pages = [p for p in pm.document.pages[1:] if any(isinstance(x, Rectangle) for x in p.primitives)]
    assert len(warning_pages) > 1
    assert all(not page.is_empty for page in pm.document.pages[1:])
    for page in warning_pages:
        (box,) = rects(page)
        assert box.y >= config.margin_bottom
        assert box.height <= config.content_height
        runs = [run for run in page.text_runs if run.color == WARNING_TEXT_COLOR]
        assert runs
        assert all(box.y < run.y < box.y + box.height for run in runs)

    drawn = " ".join(
        run.text for page in warning_pages for run in page.text_runs if run.color == WARNING_TEXT_COLOR
    )
    assert drawn == warning


def test_empty_warning_draws_no_box(pm, config):
    draw_info_sheet_page(pm, InfoSheetContent(title="INFO", warning_text=""))
    page = pm.page

    assert rects(page) == []
    title, heading = page.text_runs[0], page.text_runs[1]
    assert heading.text == HELP_HEADING
    assert title.y - heading.y == pytest.approx(
        config.line_spacing(config.font_size_heading1) + config.paragraph_spacing
    )


def test_warning_box_height_grows_after_two_lines(config):
    spacing = config.line_spacing(config.font_size_body)
    assert warning_box_height(1, spacing) == WARNING_BOX_HEIGHT
    assert warning_box_height(2, spacing) == WARNING_BOX_HEIGHT
    assert warning_box_height(3, spacing) == pytest.approx(2 * spacing + 40)


def test_organization_optional_fields_are_skipped(pm):
    info = InfoSheetContent(
        title="INFO",
        warning_text="Warning",
        help_organizations=(HelpOrganization(name="Local Advice Centre"),),
    )
    draw_info_sheet_page(pm, info)
    texts = pm.page.texts()
    assert "Local Advice Centre" in texts
    assert not any(t.startswith(("Phone:", "Website:")) for t in texts)


def test_many_organizations_flow_onto_more_pages(pm, config):
    orgs = tuple(
        HelpOrganization(name=f"Advice Service {i}", phone="0800 000 000", website="example.org",
                         description="Free advice")
        for i in range(30)
    )
    draw_info_sheet_page(pm, InfoSheetContent(title="INFO", warning_text="Warning", help_organizations=orgs))

    assert pm.document.page_count > 2
    for page in pm.document.pages:
        assert all(p.bottom >= config.margin_bottom for p in page.primitives)


def test_reply_form_starts_on_new_page(pm):
    pm.draw_line_of_text("Main letter text")
    draw_reply_form_page(pm, standard_reply_form("Acme Ltd", "Widget Ltd", "£500.00", "INV-1"))
    assert pm.document.pages[1].texts()[0] == "REPLY FORM"
    assert pm.document.pages[0].texts() == ["Main letter text"]


def test_reply_form_header_fields(pm):
    draw_reply_form_page(pm, standard_reply_form("Acme Ltd", "Widget Ltd", "£500.00", "INV-1"))
    texts = pm.document.pages[1].texts()
    assert texts[1:5] == [
        "To: Acme Ltd",
        "From: Widget Ltd",
        "Amount Claimed: £500.00",
        "Invoice Reference: INV-1",
    ]


def test_checkbox_options_draw_a_square_with_indented_label(pm, config):
    form = ReplyFormContent(
        title="REPLY FORM", claimant_name="A", debtor_name="B", claim_amount="£1.00", invoice_ref="X",
        sections=(ReplyFormSection(
            title="SECTION 1",
            options=(
                ReplyFormOption("I will pay in full", has_checkbox=True),
                ReplyFormOption("Amount offered: £____"),
            ),
        ),),
    )
    draw_reply_form_page(pm, form)
    page = pm.page

    boxes = rects(page)
    assert len(boxes) == 1
    assert boxes[0].width == boxes[0].height == CHECKBOX_SIZE
    assert boxes[0].fill_color is None
    label = next(run for run in page.text_runs if run.text == "I will pay in full")
    assert label.x == config.margin_left + CHECKBOX_LABEL_INDENT
    plain = next(run for run in page.text_runs if run.text == "Amount offered: £____")
    assert plain.x == config.margin_left


def test_sub_options_are_listed_under_their_option(pm, config):
    form = standard_reply_form("A", "B", "£1.00", "X")
    draw_reply_form_page(pm, form)
    texts = [t for page in pm.document.pages for t in page.texts()]

    dispute = texts.index("I dispute this debt (please provide full details in Section 3)")
    assert texts[dispute + 1] == "– I do not owe any of the amount claimed"
    sub_run = next(
        run for page in pm.document.pages for run in page.text_runs
        if run.text.startswith("– I owe part")
    )
    assert sub_run.x > config.margin_left + CHECKBOX_LABEL_INDENT


def test_signature_and_date_lines_follow_their_flags(pm):
    form = ReplyFormContent(
        title="REPLY FORM", claimant_name="A", debtor_name="B", claim_amount="£1.00", invoice_ref="X",
        sections=(
            ReplyFormSection(title="SIGNED", has_signature_line=True),
            ReplyFormSection(title="DATED", has_date_line=True),
        ),
    )
    draw_reply_form_page(pm, form)
    texts = pm.page.texts()
    assert texts.index(SIGNATURE_LINE) == texts.index("SIGNED") + 1
    assert texts.index(DATE_LINE) == texts.index("DATED") + 1
    assert texts.count(SIGNATURE_LINE) == 1
    assert texts.count(DATE_LINE) == 1
