"""
Unit tests for utils.image_utils module.
"""
import base64
from io import BytesIO

import pytest
from PIL import Image

from conftest import make_png_bytes
from core.exceptions import EmptyCropError, ImageDecodeError, InvalidDataUriError
from core.models import Point, Size
from utils.image_utils import (
    crop_element_image,
    decode_data_uri,
    encode_jpeg,
    load_image,
)


def crop_size(result):
    return Image.open(BytesIO(result.image_bytes)).size


class TestDecodeDataUri:
    """Tests for decode_data_uri function."""

    def test_decode_png_uri(self, sample_data_uri, sample_png_bytes):
        assert decode_data_uri(sample_data_uri) == sample_png_bytes

    def test_decode_without_mime(self):
        uri = "data:;base64," + base64.b64encode(b"abc").decode()
        assert decode_data_uri(uri) == b"abc"

    @pytest.mark.parametrize("uri", [
        "",
        "not a uri",
        "data:image/png,rawdata",
        "data:image/png;base64,",
    ])
    def test_malformed_uri(self, uri):
        with pytest.raises(InvalidDataUriError):
            decode_data_uri(uri)

    def test_invalid_base64_payload(self):
        with pytest.raises(InvalidDataUriError):
            decode_data_uri("data:image/png;base64,@@@@")


class TestLoadImage:
    """Tests for load_image function."""

    def test_load_png(self, sample_png_bytes):
        image = load_image(sample_png_bytes)
        assert image.size == (1000, 800)

    def test_garbage_bytes(self):
        with pytest.raises(ImageDecodeError):
            load_image(b"definitely not an image")

    def test_truncated_image(self, sample_png_bytes):
        with pytest.raises(ImageDecodeError):
            load_image(sample_png_bytes[:100])


class TestEncodeJpeg:
    """Tests for encode_jpeg function."""

    def test_buffer_at_start(self):
        buf = encode_jpeg(Image.new('RGB', (10, 10)))

        assert buf.tell() == 0
        assert Image.open(buf).format == 'JPEG'

    def test_converts_alpha(self):
        """Test RGBA images are flattened so JPEG can store them."""
        buf = encode_jpeg(Image.new('RGBA', (10, 10), (255, 0, 0, 128)))

        assert Image.open(buf).mode == 'RGB'


class TestCropElementImage:
    """Tests for crop_element_image function."""

    def test_crop_size_and_center(self, sample_png_bytes):
        result = crop_element_image(
            sample_png_bytes, Point(500, 500), Size(50, 30), Size(1000, 800)
        )

        assert crop_size(result) == (250, 230)
        assert result.adjusted_center == Point(125, 115)
        assert Image.open(BytesIO(result.image_bytes)).format == 'JPEG'

    def test_crop_high_dpi_screenshot(self):
        screenshot = make_png_bytes(2000, 1600)

        result = crop_element_image(
            screenshot, Point(500, 400), Size(50, 30), Size(1000, 800)
        )

        assert crop_size(result) == (500, 460)
        assert result.adjusted_center == Point(250, 230)

    def test_crop_rgba_screenshot(self):
        screenshot = make_png_bytes(400, 300, color=(0, 0, 255, 255), mode='RGBA')

        result = crop_element_image(
            screenshot, Point(10, 10), Size(20, 20), Size(400, 300)
        )

        assert crop_size(result) == (220, 220)
        assert result.adjusted_center == Point(10, 10)

    def test_crop_keeps_pixels(self):
        """Test the crop is taken from the right place in the screenshot."""
        image = Image.new('RGB', (1000, 800), 'white')
        image.paste((255, 0, 0), (400, 400, 600, 600))
        buf = BytesIO()
        image.save(buf, format='PNG')

        result = crop_element_image(buf.getvalue(), Point(500, 500), Size(0, 0), Size(1000, 800))
        cropped = Image.open(BytesIO(result.image_bytes))

        red, green, blue = cropped.getpixel((result.adjusted_center.x, result.adjusted_center.y))
        assert red > 200 and green < 60 and blue < 60

    def test_malformed_image(self):
        with pytest.raises(ImageDecodeError):
            crop_element_image(b"\x00\x01", Point(0, 0), Size(1, 1), Size(1, 1))

    def test_element_outside_screenshot(self, sample_png_bytes):
        with pytest.raises(EmptyCropError):
            crop_element_image(
                sample_png_bytes, Point(5000, 5000), Size(10, 10), Size(1000, 800)
            )
