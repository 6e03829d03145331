"""Split drafted letter text into body paragraphs.

Drafts arrive as lightly marked-up text: blank lines separate paragraphs,
"- " or "• " starts a bullet, and a line wrapped entirely in ** is a
section heading. Lines the letter layout draws itself (date, salutation,
reference, closing) are skipped.
"""

import re
from typing import List, Tuple

from .paragraphs import BulletList, HeadingParagraph, Paragraph, PlainParagraph


BULLET_PREFIXES = ("- ", "• ")

HEADER_LINE_PATTERNS = (
    re.compile(r"^[A-Z][A-Z0-9\s,]+$"),  # postcodes and other shouted address lines
    re.compile(r"^\d{1,2}\s+[A-Z][a-z]+\s+\d{4}$"),  # 3 March 2025
)
HEADER_LINE_PREFIXES = (
    "Dear ", "RE:", "Re:", "Yours faithfully", "Kind regards", "IMPORTANT:",
)


def strip_markdown(text: str) -> str:
    return text.replace("**", "")


def is_entirely_bold(line: str) -> bool:
    return line.startswith("**") and line.endswith("**") and len(line) > 4


def is_header_line(line: str) -> bool:
    if line == "---":
        return True
    if line.startswith(HEADER_LINE_PREFIXES):
        return True
    return any(pattern.match(line) for pattern in HEADER_LINE_PATTERNS)


class _BodyBuilder:
    def __init__(self):
        self.paragraphs: List[Paragraph] = []
        self.lines: List[str] = []
        self.bullets: List[str] = []

    def flush_paragraph(self) -> None:
        if self.lines:
            # A paragraph that opens in bold is drawn bold throughout
            bold = self.lines[0].startswith("**")
            self.paragraphs.append(
                PlainParagraph(text=strip_markdown(" ".join(self.lines)), bold=bold)
            )
            self.lines = []

    def flush_bullets(self) -> None:
        if self.bullets:
            self.paragraphs.append(
                BulletList(items=tuple(strip_markdown(item) for item in self.bullets))
            )
            self.bullets = []


def parse_body_text(content: str) -> Tuple[Paragraph, ...]:
    """Convert drafted text into an ordered tuple of paragraphs."""
    if not content:
        return ()

    builder = _BodyBuilder()

    for raw_line in content.split("\n"):
        line = raw_line.strip()

        if line and is_header_line(line):
            continue

        if is_entirely_bold(line):
            builder.flush_paragraph()
            builder.flush_bullets()
            builder.paragraphs.append(HeadingParagraph(text=line[2:-2].strip(), level=2))
            continue

        if line.startswith(BULLET_PREFIXES):
            builder.flush_paragraph()
            builder.bullets.append(line[2:].strip())
            continue

        if line and builder.bullets:
            builder.flush_bullets()

        if not line:
            builder.flush_paragraph()
            continue

        builder.lines.append(line)

    builder.flush_paragraph()
    builder.flush_bullets()
    return tuple(builder.paragraphs)
