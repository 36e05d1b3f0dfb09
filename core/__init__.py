"""Core package - Domain models, constants and exceptions."""

from .models import (
    Point,
    Size,
    Rectangle,
    CropGeometry,
    CropResult,
    OcrLine,
    CompactOcrEntry,
    CompactOcrResult,
    PromptData,
    SeedExample,
    NewExample,
)
from .constants import (
    MINIMUM_BUFFER,
    DPI_TOLERANCE,
    MAX_LINES_OCR,
    MIN_SEED_FLOOR,
    MIN_TEXT_FLOOR,
    TEXT_SHRINK_FACTOR,
    PROMPT_PREAMBLE,
)
from .exceptions import (
    PigeonError,
    ConfigurationError,
    InvalidUploadError,
    InvalidDataUriError,
    ImageDecodeError,
    EmptyCropError,
    BoundingBoxFormatError,
    RemoteServiceError,
    PromptTooLongError,
    PromptTooLargeError,
    PromptBuildError,
    EmptySeedListError,
    UnlabeledSeedError,
    SeedSelectionError,
    RecordNotFoundError,
)

__all__ = [
    'Point',
    'Size',
    'Rectangle',
    'CropGeometry',
    'CropResult',
    'OcrLine',
    'CompactOcrEntry',
    'CompactOcrResult',
    'PromptData',
    'SeedExample',
    'NewExample',
    'MINIMUM_BUFFER',
    'DPI_TOLERANCE',
    'MAX_LINES_OCR',
    'MIN_SEED_FLOOR',
    'MIN_TEXT_FLOOR',
    'TEXT_SHRINK_FACTOR',
    'PROMPT_PREAMBLE',
    'PigeonError',
    'ConfigurationError',
    'InvalidUploadError',
    'InvalidDataUriError',
    'ImageDecodeError',
    'EmptyCropError',
    'BoundingBoxFormatError',
    'RemoteServiceError',
    'PromptTooLongError',
    'PromptTooLargeError',
    'PromptBuildError',
    'EmptySeedListError',
    'UnlabeledSeedError',
    'SeedSelectionError',
    'RecordNotFoundError',
]
