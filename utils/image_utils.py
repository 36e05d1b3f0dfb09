"""
Image utilities for the element description workflow.

Handles data URI decoding, image loading and the element crop pipeline.
"""
import base64
import binascii
import logging
import re
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from core.constants import CROP_IMAGE_FORMAT, CROP_IMAGE_QUALITY, DATA_URI_PATTERN
from core.exceptions import EmptyCropError, ImageDecodeError, InvalidDataUriError
from core.models import CropResult, Point, Size
from utils.geometry_utils import compute_crop_geometry

logger = logging.getLogger(__name__)


def decode_data_uri(data_uri: str) -> bytes:
    """
    Extract the binary payload of a base64 data URI.

    Args:
        data_uri: String of the form data:<mime>;base64,<payload>

    Returns:
        Decoded bytes

    Raises:
        InvalidDataUriError: If the URI or its payload is malformed
    """
    match = re.match(DATA_URI_PATTERN, data_uri or '', re.DOTALL)
    if match is None:
        raise InvalidDataUriError("Image must be a base64 data URI")

    try:
        return base64.b64decode(match.group('data'), validate=True)
    except binascii.Error as e:
        raise InvalidDataUriError(f"Invalid base64 payload: {e}") from e


def load_image(image_bytes: bytes) -> Image.Image:
    """
    Decode image bytes into a PIL Image.

    Raises:
        ImageDecodeError: If Pillow cannot read the bytes
    """
    try:
        image = Image.open(BytesIO(image_bytes))
        image.load()
    # Pillow reports some corrupt files as SyntaxError
    except (UnidentifiedImageError, OSError, SyntaxError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e
    return image


def encode_jpeg(image: Image.Image, quality: int = CROP_IMAGE_QUALITY) -> BytesIO:
    """
    Encode an image as JPEG into an in-memory buffer positioned at its start.
    """
    # JPEG has no alpha channel or palette
    if image.mode != 'RGB':
        image = image.convert('RGB')

    buf = BytesIO()
    image.save(buf, format=CROP_IMAGE_FORMAT, quality=quality)
    buf.seek(0)
    return buf


def crop_element_image(
    image_bytes: bytes,
    element_center: Point,
    element_size: Size,
    window_size: Size
) -> CropResult:
    """
    Crop a page screenshot down to the element and its surroundings.

    Args:
        image_bytes: Encoded screenshot
        element_center: Element center in logical window pixels
        element_size: Element size in logical window pixels
        window_size: Window size reported by the browser

    Returns:
        CropResult with JPEG bytes and the element center in the crop's frame

    Raises:
        ImageDecodeError: If the screenshot cannot be decoded
        EmptyCropError: If the element lies entirely outside the screenshot
    """
    image = load_image(image_bytes)
    screenshot_size = Size(*image.size)

    geometry = compute_crop_geometry(
        element_center,
        element_size,
        window_size,
        screenshot_size
    )
    rectangle = geometry.rectangle

    if rectangle.area == 0:
        raise EmptyCropError(
            f"Crop {rectangle} is empty for screenshot {screenshot_size.width}x{screenshot_size.height}"
        )

    cropped = image.crop(rectangle.to_box())
    buf = encode_jpeg(cropped)

    logger.debug(
        "Cropped %dx%d screenshot to %s",
        screenshot_size.width, screenshot_size.height, rectangle
    )

    return CropResult(image_bytes=buf.getvalue(), adjusted_center=geometry.adjusted_center)
