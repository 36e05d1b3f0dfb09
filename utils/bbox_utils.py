"""
Bounding box utilities for OCR results.

Handles parsing of vendor box strings and distance measurements.
"""
import math
import re
from typing import Tuple

from core.exceptions import BoundingBoxFormatError
from core.models import Point

# "left,top,width,height" - four non-negative integers
BOUNDING_BOX_PATTERN = re.compile(r'^\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*$')


def parse_bounding_box(raw_box: str) -> Tuple[int, int, int, int]:
    """
    Parse an OCR bounding box string.

    Args:
        raw_box: Box string in the format "L,T,W,H"

    Returns:
        Tuple of (left, top, width, height)

    Raises:
        BoundingBoxFormatError: If the string is not four non-negative integers
    """
    match = BOUNDING_BOX_PATTERN.match(raw_box or '')
    if match is None:
        raise BoundingBoxFormatError(raw_box)

    left, top, width, height = (int(value) for value in match.groups())
    return left, top, width, height


def box_center(left: int, top: int, width: int, height: int) -> Tuple[float, float]:
    """Center of a left/top/width/height box."""
    return (left + width / 2, top + height / 2)


def distance_to_point(center: Tuple[float, float], point: Point) -> float:
    """Euclidean distance between a box center and a point."""
    return math.hypot(center[0] - point.x, center[1] - point.y)
