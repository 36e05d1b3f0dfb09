"""
Pydantic models for the OCR service response.

The vendor nests words in lines in regions. It emits camelCase keys while
older clients documented them in PascalCase, so both spellings are accepted.
"""
from typing import List

from pydantic import AliasChoices, BaseModel, Field


class OcrWord(BaseModel):
    """A single recognized word."""
    text: str = Field(..., validation_alias=AliasChoices('text', 'Text'))


class OcrLineResult(BaseModel):
    """A line of words with its 'L,T,W,H' bounding box string."""
    bounding_box: str = Field(
        ...,
        validation_alias=AliasChoices('boundingBox', 'BoundingBox', 'bounding_box')
    )
    words: List[OcrWord] = Field(
        default_factory=list,
        validation_alias=AliasChoices('words', 'Words')
    )


class OcrRegion(BaseModel):
    """A block of lines; grouping is not used downstream."""
    lines: List[OcrLineResult] = Field(
        default_factory=list,
        validation_alias=AliasChoices('lines', 'Lines')
    )


class OcrResponse(BaseModel):
    """Top-level OCR response."""
    regions: List[OcrRegion] = Field(
        default_factory=list,
        validation_alias=AliasChoices('regions', 'Regions')
    )
