"""Exceptions raised while extracting records from a page."""

from bs4 import PageElement

from larousse_scraper.nodes import node_snippet


class LarousseError(Exception):
    """Base class for every error raised by larousse_scraper."""


class StructuralFailure(LarousseError):
    """
    A node the page layout guarantees is missing or malformed.

    Carries the name of the function that gave up, a snippet of the node it
    was looking at and a short message. Outside of word code fallback and
    skip_failed runs, they reach the caller: the markup has drifted and needs
    a human look.
    """

    def __init__(self, function: str, node: PageElement | str | None, message: str):
        self.function = function
        self.snippet = node_snippet(node)
        self.message = message
        # Positional args mirror __init__ so the error survives pickling
        super().__init__(function, self.snippet, message)

    def __str__(self) -> str:
        text = f"{self.function}: {self.message}"
        if self.snippet:
            text += f"\n{self.snippet}"
        return text
