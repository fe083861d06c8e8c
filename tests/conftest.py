"""
Pytest configuration and global fixtures.
"""
import sys
from pathlib import Path

import fitz  # PyMuPDF
import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.models import RawOutlineNode
from data.db_models import Base


def make_pdf(num_pages: int, toc: list = None) -> bytes:
    """Build a PDF whose pages read "Page N", optionally with bookmarks."""
    doc = fitz.open()
    for page_num in range(1, num_pages + 1):
        page = doc.new_page()
        page.insert_text((72, 72), f"Page {page_num}")
    if toc:
        doc.set_toc(toc)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture(scope="session")
def test_db_engine():
    """Create in-memory SQLite engine with one connection shared across threads."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
        echo=False
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture
def test_db_session(test_db_engine):
    """Create fresh database session for each test."""
    Session = sessionmaker(bind=test_db_engine)
    session = Session()

    yield session

    # Rollback uncommitted changes and wipe committed rows
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def pdf_factory():
    """Provide the PDF builder to tests."""
    return make_pdf


@pytest.fixture
def book_toc():
    """Bookmarks of a 25-page document in PyMuPDF get_toc() format."""
    return [
        [1, "Intro", 1],
        [1, "Body", 5],
        [2, "Body.A", 5],
        [2, "Body.B", 9],
        [1, "End", 20],
    ]


@pytest.fixture
def book_pdf(book_toc):
    """25-page PDF with a two-level outline."""
    return make_pdf(25, book_toc)


@pytest.fixture
def plain_pdf():
    """5-page PDF without bookmarks."""
    return make_pdf(5)


@pytest.fixture
def book_raw_outline():
    """Raw outline matching book_toc."""
    return [
        RawOutlineNode("Intro", 1),
        RawOutlineNode("Body", 5, [
            RawOutlineNode("Body.A", 5),
            RawOutlineNode("Body.B", 9),
        ]),
        RawOutlineNode("End", 20),
    ]
