"""
OCR result compaction.

Raw OCR output can run to hundreds of lines; only text close to the element
describes it, and the completion prompt has a small budget. Lines are ranked
by distance to the element center and truncated.
"""
from typing import Iterable, Iterator, List

from core.constants import MAX_LINES_OCR
from core.models import CompactOcrEntry, CompactOcrResult, OcrLine, Point
from core.ocr_schemas import OcrLineResult, OcrRegion
from utils.bbox_utils import box_center, distance_to_point, parse_bounding_box


def flatten_lines(regions: Iterable[OcrRegion]) -> Iterator[OcrLineResult]:
    """Yield every line of every region in response order."""
    for region in regions:
        yield from region.lines


def parse_ocr_lines(regions: Iterable[OcrRegion], element_center: Point) -> List[OcrLine]:
    """
    Parse raw OCR lines and measure their distance to the element.

    Lines without words are dropped. A malformed box on any line raises
    BoundingBoxFormatError.
    """
    parsed = []
    for raw_line in flatten_lines(regions):
        left, top, width, height = parse_bounding_box(raw_line.bounding_box)
        if not raw_line.words:
            continue

        center = box_center(left, top, width, height)
        parsed.append(OcrLine(
            left=left,
            top=top,
            width=width,
            height=height,
            text=' '.join(word.text for word in raw_line.words),
            distance=distance_to_point(center, element_center)
        ))
    return parsed


def compact_ocr_regions(
    regions: Iterable[OcrRegion],
    element_center: Point,
    max_lines: int = MAX_LINES_OCR
) -> CompactOcrResult:
    """
    Rank OCR lines by proximity to the element and keep the closest ones.

    Args:
        regions: OCR regions (regions -> lines -> words)
        element_center: Element center in the OCR'd image's coordinates
        max_lines: Maximum number of lines kept

    Returns:
        CompactOcrResult ordered by ascending distance; ties keep response order
    """
    lines = parse_ocr_lines(regions, element_center)

    # sorted() is stable, so equal distances keep flatten order
    nearest = sorted(lines, key=lambda line: line.distance)[:max_lines]

    return CompactOcrResult(entries=tuple(
        CompactOcrEntry(proximity_rank=int(line.distance), text=line.text)
        for line in nearest
    ))
