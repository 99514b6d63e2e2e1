"""
Structural comparison of extracted records.

Used by the regression tests to compare a freshly extracted page against a
golden record: the first difference is reported as a path into the record
tree, e.g. ``words[2].subheaders[0].items[1].phrases[0].source_text``.
"""

import dataclasses
from typing import Any, NamedTuple

from larousse_scraper.errors import StructuralFailure
from larousse_scraper.models import PAGE_ID_COMPARISON
from larousse_scraper.page import page_ids_from_urls


class Difference(NamedTuple):
    path: str
    expected: Any
    actual: Any
    message: str = ""

    def __str__(self) -> str:
        text = f"{self.path or '<root>'}: expected {self.expected!r}, got {self.actual!r}"
        if self.message:
            text += f" ({self.message})"
        return text


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _compare_page_ids(expected: list[str], actual: list[str], path: str) -> Difference | None:
    # The same page can be linked with a URL whose text differs between two
    # scrapes (a "®" doubled or dropped); only the trailing ID is stable
    try:
        expected_ids = page_ids_from_urls(expected)
        actual_ids = page_ids_from_urls(actual)
    except StructuralFailure as err:
        return Difference(path, expected, actual, str(err))
    return first_difference(expected_ids, actual_ids, path)


def first_difference(expected: Any, actual: Any, path: str = "") -> Difference | None:
    """
    Find the first point where two record trees differ.

    The lengths of all list fields of a record are compared first, then its
    fields in declaration order, lists element by element. Returns None when
    both trees are equal.
    """
    if dataclasses.is_dataclass(expected) and not isinstance(expected, type):
        if type(expected) is not type(actual):
            return Difference(path, type(expected).__name__, type(actual).__name__, "type mismatch")
        for f in dataclasses.fields(expected):
            expected_value = getattr(expected, f.name)
            actual_value = getattr(actual, f.name)
            if isinstance(expected_value, list) and isinstance(actual_value, list) \
                    and len(expected_value) != len(actual_value):
                return Difference(f"len({_join(path, f.name)})", len(expected_value), len(actual_value))
        for f in dataclasses.fields(expected):
            field_path = _join(path, f.name)
            expected_value = getattr(expected, f.name)
            actual_value = getattr(actual, f.name)
            if f.metadata.get("compare") == PAGE_ID_COMPARISON["compare"]:
                difference = _compare_page_ids(expected_value, actual_value, field_path)
            else:
                difference = first_difference(expected_value, actual_value, field_path)
            if difference is not None:
                return difference
        return None

    if isinstance(expected, list):
        if not isinstance(actual, list):
            return Difference(path, expected, actual, "type mismatch")
        if len(expected) != len(actual):
            return Difference(f"len({path})", len(expected), len(actual))
        for i, (expected_item, actual_item) in enumerate(zip(expected, actual)):
            difference = first_difference(expected_item, actual_item, f"{path}[{i}]")
            if difference is not None:
                return difference
        return None

    if expected != actual:
        return Difference(path, expected, actual)
    return None


def diff(expected: Any, actual: Any) -> tuple[str, bool]:
    """
    Compare two record trees.

    Returns ("", True) when they are equal, otherwise a description of the
    first difference, starting with its path, and False.
    """
    difference = first_difference(expected, actual)
    if difference is None:
        return "", True
    return str(difference), False
