"""Annex pages appended after the main letter.

Both annexes always start on a new page.
"""

import logging

from .blocks import BULLET
from .content import InfoSheetContent, ReplyFormContent, ReplyFormOption, ReplyFormSection
from .document import RGB
from .fonts import FontRole
from .layout_engine import PageManager

logger = logging.getLogger(__name__)


# Info sheet warning box
WARNING_BOX_HEIGHT = 60
WARNING_BOX_PADDING = 10
WARNING_TEXT_OFFSET = 20
WARNING_BORDER_COLOR: RGB = (0.8, 0.2, 0.2)
WARNING_FILL_COLOR: RGB = (1.0, 0.95, 0.95)
WARNING_TEXT_COLOR: RGB = (0.6, 0.0, 0.0)
WARNING_BORDER_WIDTH = 2

HELP_HEADING = "WHERE TO GET FREE HELP"

# Reply form
CHECKBOX_SIZE = 12
CHECKBOX_BASELINE_DROP = 3
CHECKBOX_LABEL_INDENT = 18
CHECKBOX_LABEL_MARGIN = 20
SUB_OPTION_INDENT = 36
SUB_OPTION_MARKER = "–"
OPTION_GAP = 4
SIGNATURE_BLOCK_HEIGHT = 50
SIGNATURE_LINE = "Signature: _______________________"
DATE_LINE = "Date: _______________________"


def draw_annex_title(pm: PageManager, title: str) -> None:
    size = pm.config.font_size_heading1
    pm.draw_text(title, size, FontRole.BOLD, align="center")
    pm.move_down(pm.config.line_spacing(size))
    pm.move_down(pm.config.paragraph_spacing)


# ============================================================================
# INFORMATION SHEET
# ============================================================================

def warning_box_height(line_count: int, line_spacing: float) -> float:
    """Box height for line_count warning lines, never below WARNING_BOX_HEIGHT."""
    return max(WARNING_BOX_HEIGHT, (line_count - 1) * line_spacing + 2 * WARNING_TEXT_OFFSET)


def warning_lines_fitting(height: float, line_spacing: float) -> int:
    """Number of warning lines whose box fits in height."""
    if height < WARNING_BOX_HEIGHT:
        return 0
    return int((height - 2 * WARNING_TEXT_OFFSET) // line_spacing) + 1


def draw_warning_box(pm: PageManager, warning_text: str) -> None:
    """
    Tinted, bordered box with the warning text in bold inside it.

    The box is WARNING_BOX_HEIGHT tall and grows only when the wrapped
    warning needs more than two lines. A warning longer than the room left
    on the page continues in a new box on the next page. Empty warnings
    draw nothing.
    """
    config = pm.config
    size = config.font_size_body
    line_spacing = config.line_spacing(size)

    lines = pm.wrap(
        warning_text, pm.content_width - 2 * WARNING_BOX_PADDING, size, FontRole.BOLD
    )
    if not lines:
        return

    while lines:
        capacity = warning_lines_fitting(pm.y - config.margin_bottom, line_spacing)
        if capacity == 0:
            pm.add_new_page()
            capacity = max(1, warning_lines_fitting(config.content_height, line_spacing))
        chunk, lines = lines[:capacity], lines[capacity:]

        box_height = warning_box_height(len(chunk), line_spacing)
        top = pm.y
        box_bottom = top - box_height + WARNING_BOX_PADDING

        # Box first so the text draws over the fill
        pm.draw_rect(
            config.margin_left,
            box_bottom,
            pm.content_width,
            box_height,
            border_color=WARNING_BORDER_COLOR,
            border_width=WARNING_BORDER_WIDTH,
            fill_color=WARNING_FILL_COLOR,
        )

        for i, line in enumerate(chunk):
            pm.place_text(
                line,
                config.margin_left + WARNING_BOX_PADDING,
                top - WARNING_TEXT_OFFSET - i * line_spacing,
                size,
                FontRole.BOLD,
                color=WARNING_TEXT_COLOR,
            )

        pm.move_down(top - box_bottom)

    pm.move_down(config.paragraph_spacing)


def draw_info_sheet_page(pm: PageManager, info_sheet: InfoSheetContent) -> None:
    """Information sheet: title, warning box, help directory, notes."""
    pm.add_new_page()
    logger.debug("Info sheet starts on page %d", pm.page_index + 1)

    config = pm.config
    body_size = config.font_size_body
    small_size = config.font_size_small
    line_spacing = config.line_spacing(body_size)

    draw_annex_title(pm, info_sheet.title)
    draw_warning_box(pm, info_sheet.warning_text)

    pm.draw_line_of_text(HELP_HEADING, config.font_size_heading2, FontRole.BOLD)
    pm.move_down(config.paragraph_spacing / 2)

    for org in info_sheet.help_organizations:
        # Keep name, phone and website together
        pm.ensure_space(line_spacing * 3)

        pm.draw_line_of_text(org.name, body_size, FontRole.BOLD)
        if org.phone:
            pm.draw_line_of_text(f"Phone: {org.phone}", body_size)
        if org.website:
            pm.draw_line_of_text(f"Website: {org.website}", body_size)
        if org.description:
            pm.draw_text_block(org.description, small_size)

        pm.move_down(config.paragraph_spacing / 2)

    pm.move_down(config.paragraph_spacing)
    for info in info_sheet.additional_info:
        pm.draw_text_block(f"{BULLET} {info}", body_size)


# ============================================================================
# REPLY FORM
# ============================================================================

def draw_reply_form_header(pm: PageManager, reply_form: ReplyFormContent) -> None:
    pm.draw_line_of_text(f"To: {reply_form.claimant_name}")
    pm.draw_line_of_text(f"From: {reply_form.debtor_name}")
    pm.draw_line_of_text(f"Amount Claimed: {reply_form.claim_amount}", role=FontRole.BOLD)
    pm.draw_line_of_text(f"Invoice Reference: {reply_form.invoice_ref}")
    pm.move_down(pm.config.paragraph_spacing)


def draw_checkbox_option(pm: PageManager, option: ReplyFormOption) -> None:
    """Empty square at the margin with the label on a hanging indent."""
    config = pm.config
    size = config.font_size_body
    line_spacing = config.line_spacing(size)
    label_x = config.margin_left + CHECKBOX_LABEL_INDENT

    lines = pm.wrap(option.label, pm.content_width - CHECKBOX_LABEL_MARGIN, size)

    pm.ensure_space(line_spacing)
    pm.draw_rect(
        config.margin_left,
        pm.y - CHECKBOX_BASELINE_DROP,
        CHECKBOX_SIZE,
        CHECKBOX_SIZE,
        border_width=1,
    )
    for line in lines:
        pm.draw_text(line, size, x=label_x)
        pm.move_down(line_spacing)
    if not lines:
        pm.move_down(line_spacing)


def draw_sub_options(pm: PageManager, sub_options) -> None:
    x = pm.config.margin_left + SUB_OPTION_INDENT
    for sub_option in sub_options:
        pm.draw_text_block(f"{SUB_OPTION_MARKER} {sub_option}", x=x)


def draw_reply_form_section(pm: PageManager, section: ReplyFormSection) -> None:
    config = pm.config
    heading_size = config.font_size_heading2
    body_size = config.font_size_body
    line_spacing = config.line_spacing(body_size)

    pm.ensure_space(heading_size * 3)
    pm.draw_line_of_text(section.title, heading_size, FontRole.BOLD)

    if section.instructions:
        pm.draw_text_block(section.instructions, body_size)

    for option in section.options:
        pm.ensure_space(line_spacing * 2)
        if option.has_checkbox:
            draw_checkbox_option(pm, option)
        else:
            pm.draw_text_block(option.label, body_size)
        draw_sub_options(pm, option.sub_options)
        pm.move_down(OPTION_GAP)

    if section.has_signature_line:
        pm.ensure_space(SIGNATURE_BLOCK_HEIGHT)
        pm.move_down(config.paragraph_spacing)
        pm.draw_text(SIGNATURE_LINE, body_size)
        pm.move_down(line_spacing * 1.5)

    if section.has_date_line:
        pm.draw_line_of_text(DATE_LINE, body_size)

    pm.move_down(config.paragraph_spacing)


def draw_reply_form_page(pm: PageManager, reply_form: ReplyFormContent) -> None:
    """Reply form: title, claim header fields and each response section."""
    pm.add_new_page()
    logger.debug("Reply form starts on page %d", pm.page_index + 1)

    draw_annex_title(pm, reply_form.title)
    draw_reply_form_header(pm, reply_form)

    for section in reply_form.sections:
        draw_reply_form_section(pm, section)
