"""
Repository pattern for data access.

Provides clean separation between data access and business logic.
"""
from typing import Callable, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.exceptions import RecordNotFoundError, SeedSelectionError
from core.models import SeedExample
from data.db_models import ImageRecord


def _set_inference(record: ImageRecord, value: Optional[str]) -> None:
    record.inference = value


def _set_page_summary(record: ImageRecord, value: Optional[str]) -> None:
    record.page_summary = value


# Explicit setter per patchable field
FIELD_SETTERS: Dict[str, Callable[[ImageRecord, Optional[str]], None]] = {
    'inference': _set_inference,
    'page_summary': _set_page_summary,
}


def validate_seed_ids(seed_ids: Sequence[int]) -> None:
    """
    Check a seed id selection.

    Raises:
        SeedSelectionError: If any id is non-positive or repeated
    """
    for seed_id in seed_ids:
        if seed_id <= 0:
            raise SeedSelectionError(f"Given nonexistent non-positive seed {seed_id}")

    if len(set(seed_ids)) != len(seed_ids):
        raise SeedSelectionError("Given duplicate seeds")


class ImageRecordRepository:
    """Repository for stored element samples."""

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        image_data: bytes,
        image_ocr_data: str,
        outer_html: str,
        page_source: Optional[str] = None
    ) -> ImageRecord:
        """Store a new unlabeled record."""
        record = ImageRecord(
            image_data=image_data,
            image_ocr_data=image_ocr_data,
            outer_html=outer_html,
            page_source=page_source,
            inference=None,
            page_summary=None
        )
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def get_by_id(self, record_id: int) -> Optional[ImageRecord]:
        """Get record by ID."""
        return self.session.get(ImageRecord, record_id)

    def get_or_raise(self, record_id: int) -> ImageRecord:
        """Get record by ID or raise RecordNotFoundError."""
        record = self.get_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record

    def list_ids(self) -> List[int]:
        """Ids of all stored records, ascending."""
        return list(self.session.scalars(select(ImageRecord.id).order_by(ImageRecord.id)))

    def get_image_data(self, record_id: int) -> bytes:
        """Raw JPEG bytes of a record."""
        image_data = self.session.scalar(
            select(ImageRecord.image_data).where(ImageRecord.id == record_id)
        )
        if image_data is None:
            raise RecordNotFoundError(record_id)
        return image_data

    def get_seeds(
        self,
        seed_ids: Sequence[int],
        ordering: Optional[Sequence[int]] = None
    ) -> List[SeedExample]:
        """
        Load seed examples by id.

        Args:
            seed_ids: Ids of records to use as seeds
            ordering: Optional explicit id order; takes precedence over the
                      natural (ascending id) order. Ids absent from it go last.

        Returns:
            List of SeedExample; ids with no stored record are skipped
        """
        validate_seed_ids(seed_ids)

        records = self.session.scalars(
            select(ImageRecord)
            .where(ImageRecord.id.in_(list(seed_ids)))
            .order_by(ImageRecord.id)
        ).all()

        if ordering is not None:
            validate_seed_ids(ordering)
            position = {seed_id: index for index, seed_id in enumerate(ordering)}
            records = sorted(records, key=lambda r: position.get(r.id, len(position)))

        return [record.to_seed() for record in records]

    def patch(self, record_id: int, changes: Dict[str, Optional[str]]) -> ImageRecord:
        """
        Apply allow-listed field changes to a record.

        Raises:
            RecordNotFoundError: If the record does not exist
            ValueError: If a field is not patchable
        """
        record = self.get_or_raise(record_id)

        for field_name, value in changes.items():
            setter = FIELD_SETTERS.get(field_name)
            if setter is None:
                raise ValueError(f"Field {field_name!r} cannot be patched")
            setter(record, value)

        self.session.commit()
        self.session.refresh(record)
        return record
