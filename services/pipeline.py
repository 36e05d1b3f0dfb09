"""
Element description pipeline.

Exposes the four pipeline steps (crop, OCR, prompt assembly, completion) and
the end-to-end flows the HTTP layer calls. Records are persisted only after
every remote step has succeeded.
"""
import logging
from typing import List, Optional, Sequence

from api.schemas import ImageUpload, SummaryUpload
from core.constants import MIN_SEED_FLOOR, MIN_TEXT_FLOOR
from core.exceptions import InvalidUploadError
from core.models import CompactOcrResult, CropResult, NewExample, SeedExample
from data.db_models import ImageRecord
from data.repositories import ImageRecordRepository
from utils.image_utils import crop_element_image, decode_data_uri
from utils.text_utils import extract_text_from_html, strip_html
from .inference_service import InferenceService
from .ocr_service import OCRService
from .prompt_builder import build_inference_prompt, validate_seeds

logger = logging.getLogger(__name__)


def preprocess_and_crop_image(upload: ImageUpload) -> CropResult:
    """Decode the uploaded screenshot and crop it around the element."""
    image_bytes = decode_data_uri(upload.image_uri)
    return crop_element_image(
        image_bytes,
        upload.element_center,
        upload.element_size,
        upload.window_size
    )


async def perform_ocr_and_rank(ocr_service: OCRService, crop: CropResult) -> CompactOcrResult:
    """OCR the cropped image and rank lines by distance to the element."""
    return await ocr_service.recognize_and_rank(crop.image_bytes, crop.adjusted_center)


def assemble_prompt(seeds: Sequence[SeedExample], new_example: NewExample) -> str:
    """Build the few-shot inference prompt."""
    return build_inference_prompt(seeds, new_example)


async def run_completion_with_retry(
    inference_service: InferenceService,
    seeds: Sequence[SeedExample],
    new_example: NewExample,
    min_seed_floor: int = MIN_SEED_FLOOR
) -> str:
    """Run inference, shrinking the seed list while the prompt is too long."""
    return await inference_service.infer(seeds, new_example, min_seed_floor=min_seed_floor)


class ElementPipeline:
    """End-to-end flows for uploads, inferences and page summaries."""

    def __init__(
        self,
        ocr_service: OCRService,
        inference_service: InferenceService,
        seed_ids: Sequence[int],
        seed_ordering: Optional[Sequence[int]] = None,
        min_seed_floor: int = MIN_SEED_FLOOR,
        min_text_floor: int = MIN_TEXT_FLOOR
    ):
        self.ocr_service = ocr_service
        self.inference_service = inference_service
        self.seed_ids: List[int] = list(seed_ids)
        self.seed_ordering = list(seed_ordering) if seed_ordering is not None else None
        self.min_seed_floor = min_seed_floor
        self.min_text_floor = min_text_floor

    async def _crop_and_ocr(self, upload: ImageUpload):
        crop = preprocess_and_crop_image(upload)
        logger.debug("Image processed and written to memory")

        ocr_result = await perform_ocr_and_rank(self.ocr_service, crop)
        logger.debug("Image OCR complete")
        return crop, ocr_result

    async def upload_sample(
        self,
        upload: ImageUpload,
        repository: ImageRecordRepository
    ) -> ImageRecord:
        """
        Crop, OCR and store a sample for later labeling.

        Raises:
            InvalidUploadError: If the upload has no outer HTML
        """
        if not upload.outer_html:
            raise InvalidUploadError("outerHTML is required to store a sample")

        crop, ocr_result = await self._crop_and_ocr(upload)

        record = repository.create(
            image_data=crop.image_bytes,
            image_ocr_data=ocr_result.to_json(),
            outer_html=strip_html(upload.outer_html),
            page_source=upload.page_source
        )
        logger.info("Stored sample %s", record.id)
        return record

    async def infer_element(
        self,
        upload: ImageUpload,
        repository: ImageRecordRepository
    ) -> str:
        """
        Crop, OCR and describe an element using stored seeds.

        Raises:
            InvalidUploadError: If the upload has no outer HTML or page title
            PromptBuildError: If the configured seeds are missing or unlabeled
        """
        if not upload.outer_html:
            raise InvalidUploadError("outerHTML is required for an inference")
        if not upload.page_title:
            raise InvalidUploadError("pageTitle is required for an inference")

        seeds = repository.get_seeds(self.seed_ids, ordering=self.seed_ordering)
        validate_seeds(seeds)
        crop, ocr_result = await self._crop_and_ocr(upload)

        new_example = NewExample(
            outer_html=strip_html(upload.outer_html),
            ocr_summary=ocr_result.to_json(),
            page_title=upload.page_title
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Inference prompt:\n%s", assemble_prompt(seeds, new_example))

        return await run_completion_with_retry(
            self.inference_service,
            seeds,
            new_example,
            min_seed_floor=self.min_seed_floor
        )

    async def summarize_page(self, upload: SummaryUpload) -> str:
        """Summarize a page from its HTML source."""
        page_text = extract_text_from_html(upload.page_source)
        logger.debug("Extracted %d characters from %s", len(page_text), upload.page_url)

        return await self.inference_service.summarize(
            upload.page_title,
            page_text,
            min_text_floor=self.min_text_floor
        )
