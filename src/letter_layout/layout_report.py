"""Write the laid-out page model to JSON for inspection and regression checks."""

import json
from pathlib import Path
from typing import Any, Dict, Tuple

from .document import Document, Page, Primitive, TextRun, LineSegment, Rectangle, ImageDraw


def to_top_left_bbox(
    bbox: Tuple[float, float, float, float],
    page_height: float,
) -> Tuple[float, float, float, float]:
    """
    Convert a PDF bbox to top-left origin coordinates.

    PDF:      origin at BOTTOM-LEFT, bbox = [x0, y_bottom, x1, y_top]
    Top-left: origin at TOP-LEFT, bbox = [x0, top, x1, bottom] where top < bottom
    """
    x0, y0, x1, y1 = bbox
    return (x0, page_height - y1, x1, page_height - y0)


def primitive_bbox(primitive: Primitive) -> Tuple[float, float, float, float]:
    if isinstance(primitive, TextRun):
        return primitive.bbox
    if isinstance(primitive, LineSegment):
        return (
            min(primitive.x1, primitive.x2), min(primitive.y1, primitive.y2),
            max(primitive.x1, primitive.x2), max(primitive.y1, primitive.y2),
        )
    return (primitive.x, primitive.y, primitive.x + primitive.width, primitive.y + primitive.height)


def primitive_to_dict(primitive: Primitive, page_height: float) -> Dict[str, Any]:
    bbox = primitive_bbox(primitive)
    record: Dict[str, Any] = {
        "kind": type(primitive).__name__,
        "bbox": [round(v, 2) for v in bbox],
        "bbox_top_left": [round(v, 2) for v in to_top_left_bbox(bbox, page_height)],
    }
    if isinstance(primitive, TextRun):
        record.update({
            "text": primitive.text,
            "font": primitive.font_name,
            "size": primitive.font_size,
        })
    elif isinstance(primitive, Rectangle):
        record["filled"] = primitive.fill_color is not None
    elif isinstance(primitive, ImageDraw):
        record["bytes"] = len(primitive.data)
    return record


def page_to_dict(page: Page) -> Dict[str, Any]:
    return {
        "page": page.index + 1,
        "width": page.width,
        "height": page.height,
        "primitives": [primitive_to_dict(p, page.height) for p in page.primitives],
    }


def document_to_dict(document: Document) -> Dict[str, Any]:
    return {
        "title": document.metadata.title,
        "page_count": document.page_count,
        "pages": [page_to_dict(page) for page in document.pages],
    }


def write_layout_report(document: Document, path: Path) -> None:
    """Write the full page model of a document to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document_to_dict(document), f, indent=2, ensure_ascii=False)
