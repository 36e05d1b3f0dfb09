"""
Crop geometry for element screenshots.

Turns the element box and window size reported by the browser into a crop
rectangle on the actual screenshot, correcting for high density displays.
"""
import logging

from core.constants import DPI_EPSILON, DPI_TOLERANCE, MINIMUM_BUFFER
from core.models import CropGeometry, Point, Rectangle, Size

logger = logging.getLogger(__name__)


def compute_dpi_scale(window_size: Size, screenshot_size: Size) -> float:
    """
    Ratio of screenshot pixels to logical window pixels.

    A zero window width carries no density information and yields 1.0.
    """
    if window_size.width <= 0:
        return 1.0
    return screenshot_size.width / window_size.width


def needs_dpi_correction(dpi_scale: float) -> bool:
    """True when the scale differs from 1 by strictly more than DPI_TOLERANCE."""
    # 1050 / 1000 - 1 lands just above 0.05 in floating point
    return abs(dpi_scale - 1) - DPI_TOLERANCE > DPI_EPSILON


def scale_point(point: Point, factor: float) -> Point:
    return Point(int(point.x * factor), int(point.y * factor))


def scale_size(size: Size, factor: float) -> Size:
    return Size(int(size.width * factor), int(size.height * factor))


def compute_crop_geometry(
    element_center: Point,
    element_size: Size,
    window_size: Size,
    screenshot_size: Size,
    minimum_buffer: int = MINIMUM_BUFFER
) -> CropGeometry:
    """
    Compute the crop rectangle around an element.

    Args:
        element_center: Element center in logical window pixels
        element_size: Element size in logical window pixels
        window_size: Window size reported by the browser
        screenshot_size: True pixel size of the screenshot
        minimum_buffer: Padding kept on each side of the element

    Returns:
        CropGeometry whose rectangle lies within the screenshot and whose
        adjusted_center is the element center relative to the crop origin
    """
    dpi_scale = compute_dpi_scale(window_size, screenshot_size)

    # every geometric input moves to screenshot pixels together
    if needs_dpi_correction(dpi_scale):
        logger.debug("Applying DPI correction with scale %.3f", dpi_scale)
        element_center = scale_point(element_center, dpi_scale)
        element_size = scale_size(element_size, dpi_scale)
        window_size = scale_size(window_size, dpi_scale)
        minimum_buffer = int(minimum_buffer * dpi_scale)

    new_width = element_size.width + 2 * minimum_buffer
    new_height = element_size.height + 2 * minimum_buffer

    left = max(element_center.x - new_width // 2, 0)
    top = max(element_center.y - new_height // 2, 0)

    # a center past the screenshot edge collapses the crop instead of escaping it
    left = min(left, screenshot_size.width)
    top = min(top, screenshot_size.height)

    width = new_width - max(new_width + left - screenshot_size.width, 0)
    height = new_height - max(new_height + top - screenshot_size.height, 0)

    return CropGeometry(
        rectangle=Rectangle(left, top, width, height),
        adjusted_center=Point(element_center.x - left, element_center.y - top)
    )
