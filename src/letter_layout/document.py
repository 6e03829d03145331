"""Format-independent page model produced by the layout engine."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


RGB = Tuple[float, float, float]

BLACK: RGB = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class TextRun:
    """A single line of text drawn at a baseline."""
    text: str
    x: float
    y: float  # baseline
    font_name: str
    font_size: float
    width: float
    color: RGB = BLACK

    @property
    def bottom(self) -> float:
        return self.y

    @property
    def bbox(self) -> Tuple[float, float, float, float]:
        """(x0, y0, x1, y1) from baseline to font size above it."""
        return (self.x, self.y, self.x + self.width, self.y + self.font_size)


@dataclass(frozen=True)
class LineSegment:
    x1: float
    y1: float
    x2: float
    y2: float
    thickness: float = 0.5
    color: RGB = BLACK

    @property
    def bottom(self) -> float:
        return min(self.y1, self.y2)


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned box; (x, y) is the bottom-left corner."""
    x: float
    y: float
    width: float
    height: float
    border_color: RGB = BLACK
    border_width: float = 1.0
    fill_color: Optional[RGB] = None

    @property
    def bottom(self) -> float:
        return self.y


@dataclass(frozen=True)
class ImageDraw:
    """Raster image scaled into a box; (x, y) is the bottom-left corner."""
    data: bytes
    x: float
    y: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.y


Primitive = Union[TextRun, LineSegment, Rectangle, ImageDraw]


@dataclass
class Page:
    """A single page and the primitives drawn on it, in draw order."""
    index: int
    width: float
    height: float
    primitives: List[Primitive] = field(default_factory=list)

    def add(self, primitive: Primitive) -> None:
        self.primitives.append(primitive)

    @property
    def is_empty(self) -> bool:
        return not self.primitives

    @property
    def text_runs(self) -> List[TextRun]:
        return [p for p in self.primitives if isinstance(p, TextRun)]

    def texts(self) -> List[str]:
        return [run.text for run in self.text_runs]


@dataclass
class DocumentMetadata:
    title: str = ""
    subject: str = ""
    creator: str = ""
    producer: str = ""


@dataclass
class Document:
    """Ordered, append-only sequence of pages."""
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    pages: List[Page] = field(default_factory=list)

    def new_page(self, width: float, height: float) -> Page:
        page = Page(index=len(self.pages), width=width, height=height)
        self.pages.append(page)
        return page

    @property
    def page_count(self) -> int:
        return len(self.pages)
