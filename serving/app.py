"""
HTTP API for element description.

Provides endpoints for:
- Storing element samples (crop + OCR)
- Inferring a description for an element from labeled seeds
- Summarizing pages
- Browsing and labeling stored samples
"""
import logging

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from api.dependencies import get_pipeline, get_repository
from api.schemas import (
    ImageIdsResponse,
    ImagePatch,
    ImageResponse,
    ImageUpload,
    SummaryUpload,
    UploadResponse,
)
from config.logging_config import setup_logging
from config.settings import settings
from core.constants import CROP_IMAGE_MIME
from core.exceptions import (
    BoundingBoxFormatError,
    ConfigurationError,
    EmptyCropError,
    ImageDecodeError,
    InvalidDataUriError,
    InvalidUploadError,
    PigeonError,
    PromptBuildError,
    PromptTooLargeError,
    RecordNotFoundError,
    RemoteServiceError,
    SeedSelectionError,
)
from data.database import init_database
from data.repositories import ImageRecordRepository
from services.pipeline import ElementPipeline

logger = logging.getLogger(__name__)

# Most specific first; PigeonError catches the rest
ERROR_STATUS = (
    (InvalidUploadError, 400),
    (InvalidDataUriError, 400),
    (ImageDecodeError, 400),
    (EmptyCropError, 400),
    (SeedSelectionError, 400),
    (RecordNotFoundError, 404),
    (PromptTooLargeError, 413),
    (RemoteServiceError, 502),
    (BoundingBoxFormatError, 502),
    (PromptBuildError, 500),
    (ConfigurationError, 500),
)


def status_for_error(error: PigeonError) -> int:
    """HTTP status code for a pipeline error."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return 500


# Create FastAPI app
app = FastAPI(
    title="Pigeon API",
    description="Describe web page elements from screenshots, HTML and OCR",
    version="1.0.0"
)


@app.on_event("startup")
async def startup_event():
    """Configure logging and create database tables."""
    setup_logging(settings.log_level)
    init_database()
    logger.info("Pigeon API initialized")


@app.exception_handler(PigeonError)
async def pigeon_error_handler(request: Request, error: PigeonError):
    status_code = status_for_error(error)
    if status_code >= 500:
        logger.error("%s on %s: %s", type(error).__name__, request.url.path, error)
    else:
        logger.debug("Rejected %s: %s", request.url.path, error)
    return JSONResponse(status_code=status_code, content={"detail": str(error)})


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Success! Access the api from /docs"


@app.post("/upload", response_model=UploadResponse)
async def upload(
    upload: ImageUpload,
    pipeline: ElementPipeline = Depends(get_pipeline),
    repository: ImageRecordRepository = Depends(get_repository)
):
    """
    Crop and OCR an element screenshot and store it for later labeling.
    """
    record = await pipeline.upload_sample(upload, repository)
    return UploadResponse(id=record.id)


@app.post("/inference", response_class=PlainTextResponse)
async def inference(
    upload: ImageUpload,
    pipeline: ElementPipeline = Depends(get_pipeline),
    repository: ImageRecordRepository = Depends(get_repository)
):
    """
    Describe an element using stored, labeled samples as examples.
    """
    return await pipeline.infer_element(upload, repository)


@app.post("/summary", response_class=PlainTextResponse)
async def summary(
    upload: SummaryUpload,
    pipeline: ElementPipeline = Depends(get_pipeline)
):
    """
    Summarize a page in one sentence.
    """
    return await pipeline.summarize_page(upload)


@app.get("/data", response_model=ImageIdsResponse)
async def list_records(repository: ImageRecordRepository = Depends(get_repository)):
    """Ids of all stored samples."""
    return ImageIdsResponse(ids=repository.list_ids())


@app.get("/data/id/{record_id}", response_model=ImageResponse)
async def get_record(
    record_id: int,
    repository: ImageRecordRepository = Depends(get_repository)
):
    """Metadata of one stored sample."""
    record = repository.get_or_raise(record_id)
    return ImageResponse(
        image_uri=f"image/id/{record_id}",
        outer_html=record.outer_html,
        image_ocr_data=record.image_ocr_data,
        inference=record.inference,
        page_source=record.page_source,
        page_summary=record.page_summary
    )


@app.patch("/data/id/{record_id}")
async def patch_record(
    record_id: int,
    patch: ImagePatch,
    repository: ImageRecordRepository = Depends(get_repository)
):
    """Set the label (inference) or page summary of a stored sample."""
    changes = patch.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="Patch contained no fields")

    repository.patch(record_id, changes)
    return {"id": record_id, "updated": sorted(changes)}


@app.get("/data/formatted/id/{record_id}", response_class=PlainTextResponse)
async def get_formatted_record(
    record_id: int,
    repository: ImageRecordRepository = Depends(get_repository)
):
    """A stored sample rendered as a prompt block."""
    return repository.get_or_raise(record_id).to_seed().render()


@app.get("/data/image/id/{record_id}")
async def get_record_image(
    record_id: int,
    repository: ImageRecordRepository = Depends(get_repository)
):
    """The cropped JPEG of a stored sample."""
    return Response(content=repository.get_image_data(record_id), media_type=CROP_IMAGE_MIME)


def main():
    """Run the API with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
