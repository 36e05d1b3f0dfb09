"""
Pydantic schemas for API request/response validation.
"""
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.constants import DATA_URI_PATTERN
from core.models import Point, Size


class ImageUpload(BaseModel):
    """Screenshot of an element plus its on-screen geometry."""
    model_config = ConfigDict(populate_by_name=True)

    element_center_x: float = Field(..., ge=0, alias="elementCenterX")
    element_center_y: float = Field(..., ge=0, alias="elementCenterY")
    element_width: float = Field(..., ge=0, alias="elementWidth")
    element_height: float = Field(..., ge=0, alias="elementHeight")
    window_width: float = Field(..., ge=0, alias="windowWidth")
    window_height: float = Field(..., ge=0, alias="windowHeight")
    image_uri: str = Field(..., alias="imageUri")
    outer_html: Optional[str] = Field(default=None, alias="outerHTML")
    page_source: Optional[str] = Field(default=None, alias="pageSource")
    page_title: Optional[str] = Field(default=None, alias="pageTitle")

    @field_validator("image_uri")
    @classmethod
    def check_data_uri(cls, value: str) -> str:
        if not re.match(DATA_URI_PATTERN, value, re.DOTALL):
            raise ValueError("imageUri must be a data:<mime>;base64,<payload> URI")
        return value

    @property
    def element_center(self) -> Point:
        return Point(int(self.element_center_x), int(self.element_center_y))

    @property
    def element_size(self) -> Size:
        return Size(int(self.element_width), int(self.element_height))

    @property
    def window_size(self) -> Size:
        return Size(int(self.window_width), int(self.window_height))


class SummaryUpload(BaseModel):
    """A full page to summarize."""
    model_config = ConfigDict(populate_by_name=True)

    page_source: str = Field(..., min_length=1, alias="pageSource")
    page_title: str = Field(..., min_length=1, alias="pageTitle")
    page_url: str = Field(..., min_length=1, alias="pageUrl")


class ImagePatch(BaseModel):
    """Fields a client may overwrite on a stored record."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    inference: Optional[str] = None
    page_summary: Optional[str] = Field(default=None, alias="pageSummary")


class UploadResponse(BaseModel):
    """Response after storing a new sample."""
    id: int
    message: str = "This sample was saved to the database."


class ImageIdsResponse(BaseModel):
    """Ids of all stored records."""
    ids: List[int]


class ImageResponse(BaseModel):
    """Response for a stored record."""
    model_config = ConfigDict(populate_by_name=True)

    image_uri: str = Field(..., serialization_alias="imageUri")
    outer_html: str = Field(..., serialization_alias="outerHTML")
    image_ocr_data: str = Field(..., serialization_alias="imageOcrData")
    inference: Optional[str] = None
    page_source: Optional[str] = Field(default=None, serialization_alias="pageSource")
    page_summary: Optional[str] = Field(default=None, serialization_alias="pageSummary")
