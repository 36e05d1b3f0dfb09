"""
Core domain models for the element description workflow.

These are pure data structures without business logic, apart from the
prompt block rendering shared by seed and new examples.
"""
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Point:
    """Integer pixel coordinate."""
    x: int
    y: int


@dataclass(frozen=True)
class Size:
    """Integer pixel extent."""
    width: int
    height: int


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle anchored at its top-left corner."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def to_box(self) -> Tuple[int, int, int, int]:
        """Convert to a (left, upper, right, lower) box as Pillow expects."""
        return (self.x, self.y, self.right, self.bottom)


@dataclass(frozen=True)
class CropGeometry:
    """Crop rectangle and the element center relative to the crop origin."""
    rectangle: Rectangle
    adjusted_center: Point


@dataclass(frozen=True)
class CropResult:
    """Cropped JPEG bytes plus the element center in the cropped frame."""
    image_bytes: bytes
    adjusted_center: Point


@dataclass(frozen=True)
class OcrLine:
    """A single OCR line with its parsed bounding box."""
    left: int
    top: int
    width: int
    height: int
    text: str
    distance: float = 0.0


@dataclass(frozen=True)
class CompactOcrEntry:
    """One ranked OCR line. proximity_rank is the truncated pixel distance."""
    proximity_rank: int
    text: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'centerProximity': self.proximity_rank,
            'text': self.text
        }


@dataclass(frozen=True)
class CompactOcrResult:
    """OCR lines nearest the element, closest first."""
    entries: Tuple[CompactOcrEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def to_list(self) -> List[dict]:
        return [entry.to_dict() for entry in self.entries]

    def to_json(self) -> str:
        """Serialize to the compact JSON stored with records and used in prompts."""
        return json.dumps(self.to_list(), ensure_ascii=False)


class PromptData(ABC):
    """Anything that can be rendered as one example block of a prompt."""

    outer_html: str
    ocr_summary: str
    page_title: Optional[str]

    @property
    @abstractmethod
    def label(self) -> Optional[str]:
        """Known label, or None for an example still to be inferred."""

    def render(self) -> str:
        """
        Render as a prompt block.

        The label line is left open for unlabeled examples so the model
        completes it.
        """
        block = f"High Priority\n{self.outer_html}\nLow Priority\n{self.ocr_summary}\n"
        if self.page_title:
            block += f"Page Title\n{self.page_title}\n"
        block += "Summary\n"
        if self.label is not None:
            block += self.label if self.label.endswith("\n") else self.label + "\n"
        return block


@dataclass(frozen=True)
class SeedExample(PromptData):
    """A previously labeled record used as an in-context example."""
    id: int
    outer_html: str
    ocr_summary: str
    inference: Optional[str]
    page_title: Optional[str] = None

    @property
    def label(self) -> Optional[str]:
        return self.inference


@dataclass(frozen=True)
class NewExample(PromptData):
    """The unlabeled example the model is asked to describe."""
    outer_html: str
    ocr_summary: str
    page_title: Optional[str] = None

    @property
    def label(self) -> Optional[str]:
        return None
