"""
API Dependencies - Dependency injection for FastAPI.

Remote clients and credentials are resolved once per process and shared
read-only by all requests.
"""
from functools import lru_cache
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from config.settings import settings
from data.database import get_db_manager
from data.repositories import ImageRecordRepository
from services.completion_client import OpenAICompletionClient
from services.inference_service import InferenceService
from services.ocr_service import OCRService
from services.pipeline import ElementPipeline


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for database session.

    Yields:
        SQLAlchemy session
    """
    with get_db_manager().session() as db:
        yield db


def get_repository(db: Session = Depends(get_db)) -> ImageRecordRepository:
    """Repository bound to a request's session."""
    return ImageRecordRepository(db)


@lru_cache(maxsize=1)
def get_ocr_service() -> OCRService:
    """
    Dependency for OCR service.

    Returns:
        OCRService configured from settings
    """
    return OCRService(**settings.get_ocr_config())


@lru_cache(maxsize=1)
def get_inference_service() -> InferenceService:
    """
    Dependency for inference service.

    Returns:
        InferenceService with inference and summary clients
    """
    config = settings.get_completion_config()
    return InferenceService(
        inference_client=OpenAICompletionClient(model=settings.inference_model, **config),
        summary_client=OpenAICompletionClient(model=settings.summary_model, **config)
    )


@lru_cache(maxsize=1)
def get_pipeline() -> ElementPipeline:
    """
    Dependency for the element pipeline.

    Returns:
        ElementPipeline wired to the shared services
    """
    return ElementPipeline(
        ocr_service=get_ocr_service(),
        inference_service=get_inference_service(),
        seed_ids=settings.seed_ids,
        seed_ordering=settings.seed_ordering,
        min_seed_floor=settings.min_seed_floor,
        min_text_floor=settings.min_text_floor
    )
