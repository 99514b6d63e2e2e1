"""
Helpers for reading a parsed Larousse page.

A page is a BeautifulSoup tree. Tags and text nodes are both "nodes" here:
the extractors walk sibling runs that mix the two, exactly as they appear in
the markup. Nothing in this module modifies the tree.
"""

from typing import Callable, Iterator

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag
from bs4.element import PreformattedString

# Length of the markup snippet attached to diagnostics
SNIPPET_LENGTH = 300

Predicate = Callable[[PageElement], bool]


def is_tag(node: PageElement | None) -> bool:
    """Check if node is an element (BeautifulSoup documents count)."""
    return isinstance(node, Tag)


def is_text(node: PageElement | None) -> bool:
    """Check if node is a plain text node (comments and doctypes are not)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def tag_name(node: PageElement | None) -> str:
    """Get the tag name of an element, or "" for anything else."""
    if isinstance(node, Tag) and not isinstance(node, BeautifulSoup):
        return node.name
    return ""


def attr(node: PageElement | None, name: str) -> str:
    """Get an attribute as a string; multi-valued attributes are re-joined."""
    if not isinstance(node, Tag):
        return ""
    value = node.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return value


def class_string(node: PageElement | None) -> str:
    """Get the raw class attribute string of an element."""
    return attr(node, "class")


def get_class(node: PageElement | None) -> list[str]:
    """Get CSS classes from element's class attribute."""
    return class_string(node).split()


def has_class(node: PageElement | None, cls: str) -> bool:
    """Check if element has a specific class."""
    return cls in get_class(node)


def get_text(node: PageElement | None) -> str:
    """
    Get the text of a node and its descendants.

    Every non-blank text fragment is stripped and the fragments are joined
    with a single space.
    """
    if node is None:
        return ""
    if is_text(node):
        return str(node).strip()
    if isinstance(node, Tag):
        return " ".join(node.stripped_strings)
    return ""


def is_whitespace(text: str) -> bool:
    """True if text is empty or made only of whitespace."""
    return all(c.isspace() for c in text)


def is_whitespace_node(node: PageElement | None) -> bool:
    """True if node is a text node holding nothing but whitespace."""
    return is_text(node) and is_whitespace(str(node))


def append_text(accumulated: str, text: str) -> str:
    """Append text, separated by a space unless one is already there."""
    if accumulated and not accumulated.endswith(" "):
        accumulated += " "
    return accumulated + text


def children(node: PageElement | None) -> list[PageElement]:
    """Get the direct children of an element (text nodes included)."""
    if isinstance(node, Tag):
        return list(node.contents)
    return []


def first_child(node: PageElement | None) -> PageElement | None:
    if isinstance(node, Tag) and node.contents:
        return node.contents[0]
    return None


def following_siblings(node: PageElement | None) -> Iterator[PageElement]:
    """Yield node and every sibling after it, in document order."""
    while node is not None:
        yield node
        node = node.next_sibling


def _walk(root: PageElement, predicate: Predicate, nested: bool) -> Iterator[PageElement]:
    # Explicit stack keeps deep pages clear of the recursion limit
    stack = [root]
    while stack:
        node = stack.pop()
        if predicate(node):
            yield node
            if not nested:
                continue
        if isinstance(node, Tag):
            stack.extend(reversed(node.contents))


def find_first(root: PageElement | None, predicate: Predicate) -> PageElement | None:
    """Find the first node matching predicate in pre-order, root included."""
    if root is None:
        return None
    for node in _walk(root, predicate, nested=True):
        return node
    return None


def find_all(root: PageElement | None, predicate: Predicate) -> list[PageElement]:
    """
    Find every node matching predicate in document order, root included.

    A matching node closes its subtree: its descendants are not searched.
    """
    if root is None:
        return []
    return list(_walk(root, predicate, nested=False))


def by_tag(name: str) -> Predicate:
    """Predicate matching elements with the given tag name."""
    return lambda node: tag_name(node) == name


def node_snippet(node: PageElement | None) -> str:
    """Get a truncated markup snippet of node for error reports."""
    if node is None:
        return ""
    return str(node)[:SNIPPET_LENGTH]
