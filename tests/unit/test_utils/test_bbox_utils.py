"""
Unit tests for utils.bbox_utils module.
"""
import math

import pytest
from core.exceptions import BoundingBoxFormatError
from core.models import Point
from utils.bbox_utils import box_center, distance_to_point, parse_bounding_box


class TestParseBoundingBox:
    """Tests for parse_bounding_box function."""

    def test_parse_valid_box(self):
        assert parse_bounding_box("10,20,30,40") == (10, 20, 30, 40)

    def test_parse_with_spaces(self):
        """Test surrounding whitespace is tolerated."""
        assert parse_bounding_box(" 1, 2 ,3,4 ") == (1, 2, 3, 4)

    @pytest.mark.parametrize("raw_box", [
        "",
        "1,2,3",
        "1,2,3,4,5",
        "a,b,c,d",
        "-1,2,3,4",
        "1.5,2,3,4",
        "[1,2,3,4]",
    ])
    def test_malformed_box_raises(self, raw_box):
        with pytest.raises(BoundingBoxFormatError) as excinfo:
            parse_bounding_box(raw_box)

        assert excinfo.value.raw_box == raw_box

    def test_none_raises(self):
        with pytest.raises(BoundingBoxFormatError):
            parse_bounding_box(None)


class TestBoxCenter:
    """Tests for box_center function."""

    def test_even_box(self):
        assert box_center(0, 0, 10, 10) == (5.0, 5.0)

    def test_odd_box_keeps_fraction(self):
        assert box_center(100, 100, 11, 7) == (105.5, 103.5)


class TestDistanceToPoint:
    """Tests for distance_to_point function."""

    def test_zero_distance(self):
        assert distance_to_point((5.0, 5.0), Point(5, 5)) == 0.0

    def test_euclidean(self):
        assert distance_to_point((3.0, 4.0), Point(0, 0)) == 5.0

    def test_diagonal(self):
        distance = distance_to_point((105.0, 105.0), Point(5, 5))
        assert math.isclose(distance, 100 * math.sqrt(2))
