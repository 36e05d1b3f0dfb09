"""Utilities package - Helper functions for geometry, images, OCR and text."""

from .geometry_utils import (
    compute_dpi_scale,
    compute_crop_geometry,
)

from .image_utils import (
    decode_data_uri,
    load_image,
    encode_jpeg,
    crop_element_image,
)

from .bbox_utils import (
    parse_bounding_box,
    box_center,
    distance_to_point,
)

from .ocr_utils import (
    parse_ocr_lines,
    compact_ocr_regions,
)

from .text_utils import (
    strip_html,
    extract_text_from_html,
)

__all__ = [
    # Geometry utils
    'compute_dpi_scale',
    'compute_crop_geometry',

    # Image utils
    'decode_data_uri',
    'load_image',
    'encode_jpeg',
    'crop_element_image',

    # BBox utils
    'parse_bounding_box',
    'box_center',
    'distance_to_point',

    # OCR utils
    'parse_ocr_lines',
    'compact_ocr_regions',

    # Text utils
    'strip_html',
    'extract_text_from_html',
]
