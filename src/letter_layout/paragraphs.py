"""Body paragraph variants: plain text, heading or bullet list."""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class PlainParagraph:
    text: str
    bold: bool = False


@dataclass(frozen=True)
class HeadingParagraph:
    text: str
    level: int = 2  # 1, 2 or 3


@dataclass(frozen=True)
class BulletList:
    items: Tuple[str, ...] = ()


Paragraph = Union[PlainParagraph, HeadingParagraph, BulletList]
