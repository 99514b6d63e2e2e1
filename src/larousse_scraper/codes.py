"""
Resolves the numeric code of each word on a translation page.

The first word's code is the page ID. Later words carry theirs on the node
just before their entry zone, or failing that on a "link" attribute of the
entry's parent. Larousse is inconsistent here, so a word whose code can't be
read takes the code of the word before it. Codes are not unique.
"""

import logging

from bs4 import PageElement

from larousse_scraper.errors import StructuralFailure
from larousse_scraper.nodes import attr
from larousse_scraper.page import get_page_id

logger = logging.getLogger(__name__)


def word_code(entry: PageElement) -> int:
    """Read the code of a word directly from the markup around its entry zone."""
    previous = entry.previous_sibling
    if previous is None:
        parent = entry.parent
        if parent is None:
            raise StructuralFailure("word_code", entry, "No previous sibling and no parent")
        raw = attr(parent, "link")
        if not raw:
            raise StructuralFailure("word_code", parent, 'No "link" attribute on entry parent')
        raw = raw[1:]
    else:
        raw = attr(previous, "id")
        if not raw:
            raise StructuralFailure("word_code", previous, "No code on node before entry")

    if not (raw.isascii() and raw.isdigit()):
        raise StructuralFailure("word_code", entry, f"Bad word code {raw!r}")
    return int(raw)


def resolve_code(index: int, doc: PageElement, entries: list[PageElement]) -> int:
    """
    Get the code of the word at index among the page's entry zones.

    Falls back to the previous word until index 0, the page ID, whose
    failure is not recovered.
    """
    for i in range(index, 0, -1):
        try:
            return word_code(entries[i])
        except StructuralFailure as err:
            logger.debug("Word %d has no readable code, using word %d's: %s", i, i - 1, err.message)
    return get_page_id(doc)


def resolve_codes(doc: PageElement, entries: list[PageElement]) -> list[int]:
    """Get the code of every word on the page, in order."""
    return [resolve_code(i, doc, entries) for i in range(len(entries))]
