"""
Pytest configuration and global fixtures.
"""
import base64
import sys
from io import BytesIO
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from data.db_models import Base
from core.models import NewExample, SeedExample


@pytest.fixture
def test_db_engine():
    """Create in-memory SQLite engine for tests."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def test_db_session(test_db_engine):
    """Create fresh database session for each test."""
    Session = sessionmaker(bind=test_db_engine)
    session = Session()

    yield session

    # Rollback any uncommitted changes and close
    session.rollback()
    session.close()


def make_png_bytes(width=1000, height=800, color='white', mode='RGB'):
    """Encode a solid-color image as PNG."""
    from PIL import Image

    img = Image.new(mode, (width, height), color=color)
    buf = BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()


@pytest.fixture
def sample_png_bytes():
    """A 1000x800 white PNG screenshot."""
    return make_png_bytes()


@pytest.fixture
def sample_data_uri(sample_png_bytes):
    """The sample screenshot as a data URI."""
    return "data:image/png;base64," + base64.b64encode(sample_png_bytes).decode()


@pytest.fixture
def upload_payload(sample_data_uri):
    """JSON body of an element upload."""
    return {
        "elementCenterX": 500.0,
        "elementCenterY": 500.0,
        "elementWidth": 50.0,
        "elementHeight": 30.0,
        "windowWidth": 1000.0,
        "windowHeight": 800.0,
        "imageUri": sample_data_uri,
        "outerHTML": "<button id=\"buy\">Buy now</button>",
        "pageTitle": "Shop",
    }


@pytest.fixture
def seeds():
    """Six labeled seeds."""
    return [
        SeedExample(
            id=i,
            outer_html=f"<a>link {i}</a>",
            ocr_summary=f'[{{"centerProximity": {i}, "text": "text {i}"}}]',
            inference=f"Link number {i}"
        )
        for i in range(1, 7)
    ]


@pytest.fixture
def new_example():
    """An unlabeled example."""
    return NewExample(
        outer_html="<button>Buy now</button>",
        ocr_summary='[{"centerProximity": 0, "text": "Buy now"}]',
        page_title="Shop"
    )


OCR_RESPONSE = {
    "language": "en",
    "regions": [
        {
            "boundingBox": "0,0,400,300",
            "lines": [
                {
                    "boundingBox": "100,100,10,10",
                    "words": [{"boundingBox": "100,100,10,10", "text": "Far"}]
                },
                {
                    "boundingBox": "0,0,10,10",
                    "words": [
                        {"boundingBox": "0,0,5,10", "text": "Near"},
                        {"boundingBox": "5,0,5,10", "text": "text"}
                    ]
                },
            ]
        }
    ]
}


@pytest.fixture
def ocr_response_json():
    """An OCR response with a near and a far line."""
    return OCR_RESPONSE
