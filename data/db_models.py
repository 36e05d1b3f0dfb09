"""
Database models for stored element samples.

Each record holds a cropped element image, its OCR summary and HTML, and
optionally a human-provided inference that makes it usable as a seed.
"""
from datetime import datetime, timezone

from sqlalchemy import BigInteger, Column, DateTime, Integer, LargeBinary, Text
from sqlalchemy.orm import declarative_base

from core.models import SeedExample

Base = declarative_base()


class ImageRecord(Base):
    """A processed element sample."""

    __tablename__ = 'images'

    # SQLite only autoincrements INTEGER primary keys
    id = Column(
        BigInteger().with_variant(Integer, 'sqlite'),
        primary_key=True,
        autoincrement=True
    )
    image_data = Column(LargeBinary)
    image_ocr_data = Column(Text, nullable=False, default='')
    outer_html = Column(Text, nullable=False, default='')
    page_source = Column(Text)
    inference = Column(Text)
    page_summary = Column(Text)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def to_seed(self) -> SeedExample:
        """View this record as a prompt seed."""
        return SeedExample(
            id=self.id,
            outer_html=self.outer_html,
            ocr_summary=self.image_ocr_data,
            inference=self.inference
        )

    def __repr__(self):
        return f"<ImageRecord(id={self.id}, labeled={self.inference is not None})>"
