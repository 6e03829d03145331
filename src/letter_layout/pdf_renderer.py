"""PDF rendering of a laid-out Document using ReportLab."""

from io import BytesIO
from pathlib import Path
from typing import Union

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .document import Document, Page, TextRun, LineSegment, Rectangle, ImageDraw


class PDFRenderer:
    """Draws every page of a Document onto a ReportLab canvas."""

    def __init__(self, invariant: bool = False):
        # invariant=True gives byte-identical output for identical documents
        self.invariant = invariant

    def render(self, document: Document) -> bytes:
        """Serialize the document and return the PDF bytes."""
        buffer = BytesIO()
        self._write(document, buffer)
        return buffer.getvalue()

    def render_to_file(self, document: Document, pdf_path: Union[str, Path]) -> None:
        with open(pdf_path, "wb") as f:
            self._write(document, f)

    def _write(self, document: Document, output) -> None:
        first = document.pages[0] if document.pages else None
        pagesize = (first.width, first.height) if first else None

        c = canvas.Canvas(output, pagesize=pagesize, invariant=int(self.invariant))
        self._set_metadata(c, document)

        for page in document.pages:
            c.setPageSize((page.width, page.height))
            self._draw_page(c, page)
            c.showPage()

        c.save()

    def _set_metadata(self, c: canvas.Canvas, document: Document) -> None:
        metadata = document.metadata
        if metadata.title:
            c.setTitle(metadata.title)
        if metadata.subject:
            c.setSubject(metadata.subject)
        if metadata.creator:
            c.setCreator(metadata.creator)
        if metadata.producer:
            c.setProducer(metadata.producer)

    def _draw_page(self, c: canvas.Canvas, page: Page) -> None:
        for primitive in page.primitives:
            if isinstance(primitive, TextRun):
                self._draw_text(c, primitive)
            elif isinstance(primitive, LineSegment):
                self._draw_line(c, primitive)
            elif isinstance(primitive, Rectangle):
                self._draw_rect(c, primitive)
            elif isinstance(primitive, ImageDraw):
                self._draw_image(c, primitive)
            else:
                raise TypeError(f"Cannot render {type(primitive).__name__}")

    def _draw_text(self, c: canvas.Canvas, run: TextRun) -> None:
        c.setFont(run.font_name, run.font_size)
        c.setFillColorRGB(*run.color)
        c.drawString(run.x, run.y, run.text)

    def _draw_line(self, c: canvas.Canvas, line: LineSegment) -> None:
        c.setStrokeColorRGB(*line.color)
        c.setLineWidth(line.thickness)
        c.line(line.x1, line.y1, line.x2, line.y2)

    def _draw_rect(self, c: canvas.Canvas, rect: Rectangle) -> None:
        c.setStrokeColorRGB(*rect.border_color)
        c.setLineWidth(rect.border_width)
        fill = 0
        if rect.fill_color is not None:
            c.setFillColorRGB(*rect.fill_color)
            fill = 1
        c.rect(rect.x, rect.y, rect.width, rect.height, stroke=1, fill=fill)

    def _draw_image(self, c: canvas.Canvas, image: ImageDraw) -> None:
        reader = ImageReader(BytesIO(image.data))
        c.drawImage(reader, image.x, image.y, width=image.width, height=image.height, mask="auto")
