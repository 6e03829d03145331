"""Page manager, text wrapping and drawing primitives for letter layout."""

import logging
from typing import List, Optional

from .config import LayoutConfig, DEFAULT_LETTER_LAYOUT
from .document import (
    Document, Page, Primitive, TextRun, LineSegment, Rectangle, ImageDraw,
    RGB, BLACK,
)
from .errors import LayoutOverflowError, NoCurrentPageError
from .fonts import FontMetrics, FontRole

logger = logging.getLogger(__name__)

# Tolerance for floating point drift when comparing against the bottom margin
OVERFLOW_EPSILON = 1e-6


def wrap_text(
    text: str,
    max_width: float,
    font_size: float,
    fonts: FontMetrics,
    role: FontRole = FontRole.REGULAR,
) -> List[str]:
    """
    Greedy word wrap of text into lines no wider than max_width.

    Words are split on single spaces. A word wider than max_width on its own
    is placed alone on a line rather than broken or dropped.
    Empty or whitespace-only text produces no lines.
    """
    if not text or not text.strip():
        return []

    lines: List[str] = []
    current_line = ""

    for word in text.split(" "):
        test_line = f"{current_line} {word}" if current_line else word
        test_width = fonts.width(test_line, font_size, role)

        if test_width > max_width and current_line:
            lines.append(current_line)
            current_line = word
        else:
            current_line = test_line

    if current_line:
        lines.append(current_line)

    return lines


class PageManager:
    """Owns the document pages and the write cursor.

    The cursor is (current page, y) in PDF coordinates, so y decreases as
    content is written down the page. Every drawing method reserves its
    height with ensure_space() first; placing anything below the bottom
    margin raises LayoutOverflowError.
    """

    def __init__(
        self,
        fonts: FontMetrics,
        config: Optional[LayoutConfig] = None,
        document: Optional[Document] = None,
        start_page: bool = True,
    ):
        self.config = config or DEFAULT_LETTER_LAYOUT
        self.fonts = fonts
        self.document = document if document is not None else Document()
        self._page: Optional[Page] = None
        self._y = self.config.content_start_y
        if start_page:
            self.add_new_page()

    @property
    def y(self) -> float:
        return self._y

    @property
    def page(self) -> Page:
        if self._page is None:
            raise NoCurrentPageError("No page has been started; call add_new_page() first")
        return self._page

    @property
    def page_index(self) -> int:
        return self.page.index

    @property
    def content_width(self) -> float:
        return self.config.content_width

    def can_fit_on_current_page(self, height: float) -> bool:
        """Check if content of given height fits on current page."""
        return self._page is not None and (self._y - height) >= self.config.margin_bottom

    def ensure_space(self, height: float) -> None:
        """Start a new page unless height fits above the bottom margin."""
        if not self.can_fit_on_current_page(height):
            self.add_new_page()

    def add_new_page(self) -> Page:
        """Append a page, make it current and move the cursor to its top."""
        self._page = self.document.new_page(self.config.page_width, self.config.page_height)
        self._y = self.config.content_start_y
        logger.debug("Started page %d", self._page.index + 1)
        return self._page

    def move_down(self, points: float) -> None:
        self._y -= points

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    def text_width(self, text: str, font_size: float, role: FontRole = FontRole.REGULAR) -> float:
        return self.fonts.width(text, font_size, role)

    def wrap(
        self,
        text: str,
        max_width: Optional[float] = None,
        font_size: Optional[float] = None,
        role: FontRole = FontRole.REGULAR,
    ) -> List[str]:
        if max_width is None:
            max_width = self.content_width
        if font_size is None:
            font_size = self.config.font_size_body
        return wrap_text(text, max_width, font_size, self.fonts, role)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _place(self, primitive: Primitive) -> None:
        if primitive.bottom < self.config.margin_bottom - OVERFLOW_EPSILON:
            raise LayoutOverflowError(
                f"{type(primitive).__name__} at y={primitive.bottom:.2f} on page "
                f"{self.page.index + 1} is below the bottom margin "
                f"({self.config.margin_bottom})"
            )
        self.page.add(primitive)

    def place_text(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float,
        role: FontRole = FontRole.REGULAR,
        color: RGB = BLACK,
    ) -> TextRun:
        """Draw text at an absolute position inside space already reserved."""
        run = TextRun(
            text=text,
            x=x,
            y=y,
            font_name=self.fonts.font_name(role),
            font_size=font_size,
            width=self.fonts.width(text, font_size, role),
            color=color,
        )
        self._place(run)
        return run

    def draw_text(
        self,
        text: str,
        font_size: Optional[float] = None,
        role: FontRole = FontRole.REGULAR,
        align: str = "left",
        x: Optional[float] = None,
        color: RGB = BLACK,
    ) -> TextRun:
        """
        Draw a single line at the cursor without advancing it.

        x overrides alignment; otherwise left starts at the left margin,
        right ends at the right margin and center is centered on the page.
        """
        if font_size is None:
            font_size = self.config.font_size_body
        self.ensure_space(self.config.line_spacing(font_size))

        if x is None:
            if align == "right":
                x = self.config.content_right_x - self.fonts.width(text, font_size, role)
            elif align == "center":
                x = (self.config.page_width - self.fonts.width(text, font_size, role)) / 2
            else:
                x = self.config.margin_left

        return self.place_text(text, x, self._y, font_size, role, color)

    def draw_line_of_text(
        self,
        text: str,
        font_size: Optional[float] = None,
        role: FontRole = FontRole.REGULAR,
        align: str = "left",
        x: Optional[float] = None,
        color: RGB = BLACK,
    ) -> TextRun:
        """Draw a single line and advance the cursor by one line."""
        if font_size is None:
            font_size = self.config.font_size_body
        run = self.draw_text(text, font_size, role, align, x, color)
        self.move_down(self.config.line_spacing(font_size))
        return run

    def draw_text_block(
        self,
        text: str,
        font_size: Optional[float] = None,
        role: FontRole = FontRole.REGULAR,
        align: str = "left",
        max_width: Optional[float] = None,
        x: Optional[float] = None,
        line_height: Optional[float] = None,
        color: RGB = BLACK,
    ) -> List[TextRun]:
        """Wrap text and draw it line by line, breaking pages as needed."""
        if font_size is None:
            font_size = self.config.font_size_body
        if line_height is None:
            line_height = self.config.line_height
        if max_width is None:
            max_width = self.content_width if x is None else self.config.content_right_x - x

        line_spacing = font_size * line_height
        runs = []
        for line in self.wrap(text, max_width, font_size, role):
            self.ensure_space(line_spacing)
            runs.append(self.draw_text(line, font_size, role, align, x, color))
            self.move_down(line_spacing)
        return runs

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        thickness: float = 0.5,
        color: RGB = BLACK,
    ) -> LineSegment:
        segment = LineSegment(x1, y1, x2, y2, thickness, color)
        self._place(segment)
        return segment

    def draw_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        border_color: RGB = BLACK,
        border_width: float = 1.0,
        fill_color: Optional[RGB] = None,
    ) -> Rectangle:
        rect = Rectangle(x, y, width, height, border_color, border_width, fill_color)
        self._place(rect)
        return rect

    def draw_image(self, data: bytes, x: float, y: float, width: float, height: float) -> ImageDraw:
        image = ImageDraw(data, x, y, width, height)
        self._place(image)
        return image
