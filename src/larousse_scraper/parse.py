#!/usr/bin/env python3
"""
Extracts records from saved Larousse pages.

Loads HTML pages saved from larousse.fr, works out whether each one is a
definition page or a translation page, and writes the extracted record next
to it as JSON.
"""

import json
import logging
import sys
from pathlib import Path

from bs4 import BeautifulSoup, PageElement

from larousse_scraper.definition import extract_definition_page
from larousse_scraper.errors import LarousseError
from larousse_scraper.models import DefinitionPage, TranslationPage
from larousse_scraper.nodes import attr, find_first
from larousse_scraper.roles import Role, by_role
from larousse_scraper.translation import extract_translation_page

logger = logging.getLogger(__name__)

# Characters removed from the markup before parsing
STRIPPED_CHARACTERS = "\n\t\r"

# Canonical link paths of the bilingual dictionaries
TRANSLATION_PATHS = (
    "/dictionnaires/francais-anglais/",
    "/dictionnaires/anglais-francais/",
)

DEFINITION = "definition"
TRANSLATION = "translation"


def load_document(markup: str | bytes) -> BeautifulSoup:
    """
    Parse a page's markup.

    Newlines, tabs and carriage returns are removed first, so the only
    whitespace-only text nodes left are literal spaces.
    """
    if isinstance(markup, bytes):
        markup = markup.decode("utf-8")
    for char in STRIPPED_CHARACTERS:
        markup = markup.replace(char, "")
    return BeautifulSoup(markup, "html.parser")


def load_file(html_path: Path) -> BeautifulSoup:
    return load_document(html_path.read_text(encoding="utf-8"))


def page_kind(doc: PageElement) -> str:
    """Tell a translation page from a definition page."""
    if find_first(doc, by_role(Role.ENTRY_ZONE)) is not None:
        return TRANSLATION
    link = attr(find_first(doc, by_role(Role.PAGE_LINK)), "href")
    if any(path in link for path in TRANSLATION_PATHS):
        return TRANSLATION
    return DEFINITION


def extract_page(doc: PageElement, *, skip_failed: bool = False) -> DefinitionPage | TranslationPage:
    """Extract the record of a page of either kind."""
    kind = page_kind(doc)
    logger.debug("Extracting %s page", kind)
    if kind == TRANSLATION:
        return extract_translation_page(doc, skip_failed=skip_failed)
    return extract_definition_page(doc, skip_failed=skip_failed)


def to_json(page: DefinitionPage | TranslationPage) -> str:
    return json.dumps(page.to_dict(), ensure_ascii=False, indent=2)


def process_file(html_path: Path, *, skip_failed: bool = False) -> Path:
    """Process a single HTML file and create the corresponding JSON file."""
    page = extract_page(load_file(html_path), skip_failed=skip_failed)

    json_path = html_path.with_suffix(".json")
    json_path.write_text(to_json(page) + "\n", encoding="utf-8")

    return json_path


def process_directory(dir_path: Path, *, skip_failed: bool = False) -> int:
    """Process all HTML files in directory. Returns count of files processed."""
    html_files = sorted(dir_path.glob("*.html"))
    count = 0

    for html_path in html_files:
        try:
            json_path = process_file(html_path, skip_failed=skip_failed)
            print(f"Created: {json_path.name}")
            count += 1
        except LarousseError as e:
            print(f"Error extracting {html_path.name}: {e}", file=sys.stderr)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading {html_path.name}: {e}", file=sys.stderr)

    return count


def main() -> int:
    """Main entry point."""
    args = sys.argv[1:]
    skip_failed = "--skip-failed" in args
    args = [arg for arg in args if arg != "--skip-failed"]
    if len(args) != 1:
        print(f"Usage: {sys.argv[0]} [--skip-failed] <directory|file.html>", file=sys.stderr)
        return 1

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    path = Path(args[0])

    if path.is_file():
        try:
            json_path = process_file(path, skip_failed=skip_failed)
        except (LarousseError, OSError, UnicodeDecodeError) as e:
            print(f"Error processing {path.name}: {e}", file=sys.stderr)
            return 1
        print(f"Created: {json_path.name}")
        return 0

    if not path.is_dir():
        print(f"Error: Not a file or directory: {path}", file=sys.stderr)
        return 1

    print(f"Processing HTML files in {path}...")
    count = process_directory(path, skip_failed=skip_failed)
    print(f"Done. Processed {count} files.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
