"""Layout configuration dataclass and YAML loading."""

from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Optional
import yaml

from .errors import LayoutConfigError


# A4 in points (72 points = 1 inch)
A4_WIDTH = 595.28  # 210mm
A4_HEIGHT = 841.89  # 297mm
DEFAULT_MARGIN = 72  # ~25mm

HEADER_ALIGNMENTS = ("left", "right", "center")
BODY_ALIGNMENTS = ("left", "justify")


@dataclass(frozen=True)
class LayoutConfig:
    """Page geometry and typography for a single letter document."""

    page_width: float = A4_WIDTH
    page_height: float = A4_HEIGHT

    margin_top: float = DEFAULT_MARGIN
    margin_bottom: float = DEFAULT_MARGIN
    margin_left: float = DEFAULT_MARGIN
    margin_right: float = DEFAULT_MARGIN

    # Typography (professional legal document style)
    font_size_body: float = 11
    font_size_heading1: float = 16
    font_size_heading2: float = 14
    font_size_small: float = 9
    line_height: float = 1.6  # multiplier on font size
    paragraph_spacing: float = 12

    header_align: str = "right"  # sender block and date
    body_align: str = "left"

    def __post_init__(self):
        if self.page_width <= 0 or self.page_height <= 0:
            raise LayoutConfigError(
                f"Page size must be positive, got {self.page_width} x {self.page_height}"
            )
        if self.content_width <= 0:
            raise LayoutConfigError(
                f"Content width must be positive: page width {self.page_width} "
                f"minus margins {self.margin_left} + {self.margin_right} "
                f"leaves {self.content_width}"
            )
        if self.content_height <= 0:
            raise LayoutConfigError(
                f"Content height must be positive, got {self.content_height}"
            )
        for name in ("font_size_body", "font_size_heading1", "font_size_heading2",
                     "font_size_small", "line_height"):
            if getattr(self, name) <= 0:
                raise LayoutConfigError(f"{name} must be positive, got {getattr(self, name)}")
        if self.paragraph_spacing < 0:
            raise LayoutConfigError(
                f"paragraph_spacing must not be negative, got {self.paragraph_spacing}"
            )
        if self.header_align not in HEADER_ALIGNMENTS:
            raise LayoutConfigError(
                f"header_align must be one of {HEADER_ALIGNMENTS}, got {self.header_align!r}"
            )
        if self.body_align not in BODY_ALIGNMENTS:
            raise LayoutConfigError(
                f"body_align must be one of {BODY_ALIGNMENTS}, got {self.body_align!r}"
            )

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def content_height(self) -> float:
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def content_start_y(self) -> float:
        """Top of content area (PDF coordinates start at bottom)."""
        return self.page_height - self.margin_top

    @property
    def content_right_x(self) -> float:
        return self.page_width - self.margin_right

    def line_spacing(self, font_size: Optional[float] = None) -> float:
        """Baseline-to-baseline distance for text at the given size."""
        if font_size is None:
            font_size = self.font_size_body
        return font_size * self.line_height

    @classmethod
    def from_yaml(cls, path: Path) -> "LayoutConfig":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise LayoutConfigError(f"{path}: expected a mapping of layout settings")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise LayoutConfigError(f"{path}: unknown layout settings {unknown}")

        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False, sort_keys=False)


DEFAULT_LETTER_LAYOUT = LayoutConfig()


def load_config(path: Optional[Path] = None) -> LayoutConfig:
    """Load config from path or return the default A4 layout."""
    if path is None:
        return DEFAULT_LETTER_LAYOUT
    return LayoutConfig.from_yaml(path)
