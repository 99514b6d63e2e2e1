"""Shared pytest fixtures for larousse_scraper tests."""

import json
import tempfile
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from larousse_scraper.models import DefinitionPage, TranslationPage
from larousse_scraper.parse import load_document


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def definition_html(fixtures_dir: Path) -> str:
    """Load definition_vert.html fixture."""
    return (fixtures_dir / "definition_vert.html").read_text(encoding="utf-8")


@pytest.fixture
def translation_html(fixtures_dir: Path) -> str:
    """Load translation_court.html fixture."""
    return (fixtures_dir / "translation_court.html").read_text(encoding="utf-8")


@pytest.fixture
def not_found_html(fixtures_dir: Path) -> str:
    """Load not_found_vertt.html fixture."""
    return (fixtures_dir / "not_found_vertt.html").read_text(encoding="utf-8")


@pytest.fixture
def definition_doc(definition_html: str) -> BeautifulSoup:
    """Parse definition_vert.html into a document."""
    return load_document(definition_html)


@pytest.fixture
def translation_doc(translation_html: str) -> BeautifulSoup:
    """Parse translation_court.html into a document."""
    return load_document(translation_html)


@pytest.fixture
def not_found_doc(not_found_html: str) -> BeautifulSoup:
    """Parse not_found_vertt.html into a document."""
    return load_document(not_found_html)


@pytest.fixture
def expected_definition_page(fixtures_dir: Path) -> DefinitionPage:
    """Load the golden record for definition_vert.html."""
    data = json.loads((fixtures_dir / "definition_vert.json").read_text(encoding="utf-8"))
    return DefinitionPage.from_dict(data)


@pytest.fixture
def expected_translation_page(fixtures_dir: Path) -> TranslationPage:
    """Load the golden record for translation_court.html."""
    data = json.loads((fixtures_dir / "translation_court.json").read_text(encoding="utf-8"))
    return TranslationPage.from_dict(data)


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for file output tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_html_file(temp_output_dir: Path, definition_html: str) -> Path:
    """Create a temporary HTML file with the definition page content."""
    html_path = temp_output_dir / "vert.html"
    html_path.write_text(definition_html, encoding="utf-8")
    return html_path
