"""Font metrics for the three letter typefaces."""

from enum import Enum
from typing import Dict, Optional

from reportlab.pdfbase import pdfmetrics

from .errors import FontsNotInitializedError


class FontRole(Enum):
    """Typeface roles used by the letter layouts."""
    REGULAR = "regular"
    BOLD = "bold"
    ITALIC = "italic"


# Standard PDF Type 1 faces, always available to ReportLab
DEFAULT_FACES: Dict[FontRole, str] = {
    FontRole.REGULAR: "Times-Roman",
    FontRole.BOLD: "Times-Bold",
    FontRole.ITALIC: "Times-Italic",
}


def role_for(bold: bool = False, italic: bool = False) -> FontRole:
    """Map bold/italic flags to a font role. Bold wins over italic."""
    if bold:
        return FontRole.BOLD
    if italic:
        return FontRole.ITALIC
    return FontRole.REGULAR


class FontMetrics:
    """Width-of-text queries against the embedded faces.

    The faces must be loaded with init_fonts() before any measurement.
    """

    def __init__(self, faces: Optional[Dict[FontRole, str]] = None):
        self._faces = dict(faces or DEFAULT_FACES)
        self._loaded: Dict[FontRole, str] = {}

    @property
    def initialized(self) -> bool:
        return bool(self._loaded)

    def init_fonts(self) -> "FontMetrics":
        """Load every face so measurement and drawing can proceed."""
        loaded = {}
        for role in FontRole:
            name = self._faces[role]
            # Raises KeyError for a face ReportLab does not know about
            pdfmetrics.getFont(name)
            loaded[role] = name
        self._loaded = loaded
        return self

    def font_name(self, role: FontRole = FontRole.REGULAR) -> str:
        if not self._loaded:
            raise FontsNotInitializedError(
                "Fonts must be initialized with init_fonts() before use"
            )
        return self._loaded[role]

    def width(self, text: str, font_size: float, role: FontRole = FontRole.REGULAR) -> float:
        """Rendered width of text in page units."""
        return pdfmetrics.stringWidth(text, self.font_name(role), font_size)
