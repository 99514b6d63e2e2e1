"""
Page-level fields shared by definition and translation pages.

Covers the page ID, the "see also" carousel, "word not found" detection with
its search suggestions, and the audio links used next to headwords and
phrases.
"""

import logging
from urllib.parse import unquote, urlparse

from bs4 import PageElement

from larousse_scraper.errors import StructuralFailure
from larousse_scraper.nodes import attr, by_tag, find_all, find_first, first_child, is_text, tag_name
from larousse_scraper.roles import Role, by_role

logger = logging.getLogger(__name__)

SITE_ROOT = "https://larousse.fr"
AUDIO_HOST = "voix.larousse.fr"
PRONUNCIATION_PATH = "dictionnaires-prononciation/"
DICTIONARY_PATH = "/dictionnaires/"


def page_id_from_url(url: str, function: str = "page_id_from_url") -> int:
    """Get the numeric ID at the end of a Larousse URL."""
    _, sep, segment = url.rpartition("/")
    if not sep:
        raise StructuralFailure(function, None, f"No '/' in URL {url!r}")
    if not (segment.isascii() and segment.isdigit()):
        raise StructuralFailure(function, None, f"No page ID at the end of URL {url!r}")
    return int(segment)


def page_ids_from_urls(urls: list[str]) -> list[int]:
    return [page_id_from_url(url, "page_ids_from_urls") for url in urls]


def get_page_id(doc: PageElement) -> int:
    """Get the page ID from the canonical link of a page."""
    link = find_first(doc, by_role(Role.PAGE_LINK))
    if link is None:
        raise StructuralFailure("get_page_id", None, "Failed to find canonical link")
    return page_id_from_url(attr(link, "href"), "get_page_id")


def similar_words(doc: PageElement) -> list[str]:
    """
    Get the URLs of the word carousel near the bottom of a page.

    The carousel starts with the page's own word, which is skipped.
    """
    nodes = find_all(doc, by_role(Role.SIMILAR_WORD))
    urls = []
    for node in nodes[1:]:
        href = attr(first_child(node), "href")
        if not href:
            continue
        urls.append(SITE_ROOT + unquote(href))
    return urls


def is_word_not_found_page(doc: PageElement) -> bool:
    return find_first(doc, by_role(Role.CORRECTOR)) is not None


def has_suggestions(doc: PageElement) -> bool:
    """True unless a "word not found" page says it has no suggestions."""
    return find_first(doc, by_role(Role.NO_SUGGESTIONS_BANNER)) is None


def search_suggestions(doc: PageElement) -> list[str]:
    """Get the suggestion links offered by a "word not found" page."""
    corrector = find_first(doc, by_role(Role.CORRECTOR))
    if corrector is None or not has_suggestions(doc):
        return []
    if find_first(doc, by_role(Role.SUGGESTIONS_BANNER)) is None:
        logger.debug("Suggestions listed without their banner")

    urls = []
    for li in find_all(corrector, by_tag("li")):
        link = find_first(li, by_tag("a"))
        href = attr(link, "href")
        if href:
            urls.append(SITE_ROOT + href)
    return urls


def audio_url(src: str) -> str:
    """
    Turn the src of an <audio> node into the URL of its MP3 file.

    .../dictionnaires-prononciation/{lang}/.../{filename} always redirects to
    https://voix.larousse.fr/{lang}/{filename}.mp3.
    """
    _, sep, rest = src.partition(PRONUNCIATION_PATH)
    if not sep or "/" not in rest:
        return ""
    lang = rest.split("/", 1)[0]
    filename = rest.rsplit("/", 1)[1]
    if not filename:
        return ""
    return f"https://{AUDIO_HOST}/{lang}/{filename}.mp3"


def node_audio_url(node: PageElement | None) -> str:
    """Get the MP3 URL of an <audio> node."""
    return audio_url(attr(node, "src"))


def sibling_audio_url(link: PageElement) -> str:
    """
    Get the MP3 URL for a "lienson" link.

    The <audio> node follows the link, sometimes after one text node.
    """
    node = link.next_sibling
    if node is None:
        return ""
    if is_text(node):
        node = node.next_sibling
    elif tag_name(node) != "audio":
        return ""
    return node_audio_url(node)


def is_larousse_url(url: str) -> tuple[bool, str]:
    """
    Check that url points to a Larousse dictionary page.

    Returns (True, "") when it does, otherwise False and the reason.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        return False, "Scheme must be http or https"
    if "larousse.fr" not in (parsed.hostname or ""):
        return False, "Hostname must contain larousse.fr"

    after_host = url[url.index("larousse.fr") + len("larousse.fr"):]
    if "//" in after_host:
        return False, 'Found "//"'
    if "larousse.fr" + DICTIONARY_PATH not in url:
        return False, 'URL must contain "larousse.fr/dictionnaires/"'
    return True, ""
