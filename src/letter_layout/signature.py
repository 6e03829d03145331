"""Decoding and sizing of embedded signature images."""

import base64
import binascii
import re
from dataclasses import dataclass
from io import BytesIO
from typing import Tuple, Union

from PIL import Image, UnidentifiedImageError


SIGNATURE_MAX_HEIGHT = 40.0
SIGNATURE_MAX_WIDTH = 150.0

SUPPORTED_FORMATS = ("PNG", "JPEG")

DATA_URL_PATTERN = re.compile(r"^data:image/(png|jpeg|jpg);base64,(.+)$", re.DOTALL)


@dataclass(frozen=True)
class SignatureImage:
    """A decoded raster signature with its pixel dimensions."""
    data: bytes
    image_format: str
    pixel_width: int
    pixel_height: int

    @property
    def aspect_ratio(self) -> float:
        return self.pixel_width / self.pixel_height

    def fit(
        self,
        max_width: float = SIGNATURE_MAX_WIDTH,
        max_height: float = SIGNATURE_MAX_HEIGHT,
    ) -> Tuple[float, float]:
        """Scale to max_height, then shrink to max_width if still too wide."""
        draw_height = max_height
        draw_width = draw_height * self.aspect_ratio

        if draw_width > max_width:
            draw_width = max_width
            draw_height = draw_width / self.aspect_ratio

        return draw_width, draw_height


@dataclass(frozen=True)
class SignatureDecodeError:
    """Why a signature could not be used. Returned, not raised."""
    reason: str


SignatureResult = Union[SignatureImage, SignatureDecodeError]


def _strip_data_url(encoded: str) -> str:
    encoded = encoded.strip()
    if not encoded.startswith("data:"):
        return encoded
    match = DATA_URL_PATTERN.match(encoded)
    if match:
        return match.group(2)
    # Unrecognised data URL; try whatever follows the comma
    _, _, payload = encoded.partition(",")
    return payload or encoded


def decode_signature(encoded: str) -> SignatureResult:
    """
    Decode a base64 PNG or JPEG, optionally wrapped in a data URL.

    Returns SignatureImage on success and SignatureDecodeError for malformed
    base64, unreadable image data or an unsupported format.
    """
    payload = _strip_data_url(encoded)
    if not payload:
        return SignatureDecodeError("empty signature data")

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        return SignatureDecodeError(f"invalid base64: {exc}")

    try:
        with Image.open(BytesIO(data)) as image:
            image_format = image.format
            pixel_width, pixel_height = image.size
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        return SignatureDecodeError(f"unreadable image: {exc}")

    if image_format not in SUPPORTED_FORMATS:
        return SignatureDecodeError(f"unsupported image format {image_format}")
    if pixel_width <= 0 or pixel_height <= 0:
        return SignatureDecodeError("image has no pixels")

    return SignatureImage(
        data=data,
        image_format=image_format,
        pixel_width=pixel_width,
        pixel_height=pixel_height,
    )
