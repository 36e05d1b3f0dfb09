"""
OCR Service - Sends cropped element images to the OCR service.

This service performs the remote OCR call and compacts the result into the
lines nearest the element.
"""
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from core.constants import MAX_LINES_OCR, OCR_API_KEY_HEADER
from core.exceptions import ConfigurationError, RemoteServiceError
from core.models import CompactOcrResult, Point
from core.ocr_schemas import OcrResponse
from utils.ocr_utils import compact_ocr_regions

logger = logging.getLogger(__name__)


class OCRService:
    """Service for OCR processing via an HTTP OCR endpoint."""

    def __init__(
        self,
        endpoint: Optional[str],
        api_key: Optional[str],
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize OCR service.

        Args:
            endpoint: Full URL of the OCR endpoint
            api_key: Subscription key sent with every request
            timeout: Request timeout in seconds
            client: Optional shared httpx.AsyncClient

        Raises:
            ConfigurationError: If endpoint or api_key is missing
        """
        if not endpoint:
            raise ConfigurationError("AZURE_OCR_ENDPOINT")
        if not api_key:
            raise ConfigurationError("AZURE_OCR_APIKEY")

        self.endpoint = endpoint
        self.api_key = api_key
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def recognize(self, image_bytes: bytes) -> OcrResponse:
        """
        Run OCR on an encoded image.

        Args:
            image_bytes: JPEG bytes

        Returns:
            Parsed OCR response

        Raises:
            RemoteServiceError: On connection failure, non-200 status or an
                                unparseable body
        """
        try:
            response = await self.client.post(
                self.endpoint,
                content=image_bytes,
                headers={
                    OCR_API_KEY_HEADER: self.api_key,
                    'Content-Type': 'application/octet-stream',
                    'Accept': 'application/json',
                }
            )
        except httpx.HTTPError as e:
            raise RemoteServiceError('ocr', f"Could not reach OCR service: {e}") from e

        if response.status_code != 200:
            raise RemoteServiceError(
                'ocr',
                f"Unexpected response: {response.text[:200]}",
                status_code=response.status_code
            )

        try:
            return OcrResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise RemoteServiceError('ocr', f"Error parsing OCR response: {e}") from e

    async def recognize_and_rank(
        self,
        image_bytes: bytes,
        element_center: Point,
        max_lines: int = MAX_LINES_OCR
    ) -> CompactOcrResult:
        """
        Run OCR and keep the lines closest to the element.

        Args:
            image_bytes: Cropped JPEG bytes
            element_center: Element center in the cropped image's frame
            max_lines: Maximum number of lines kept

        Returns:
            CompactOcrResult ordered by ascending distance
        """
        ocr_response = await self.recognize(image_bytes)
        result = compact_ocr_regions(ocr_response.regions, element_center, max_lines)

        logger.debug("OCR kept %d lines near %s", len(result), element_center)
        return result

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
