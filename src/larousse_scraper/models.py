"""
Records produced from Larousse pages.

Two page types exist. A definition page (French monolingual dictionary)
holds a header and flat lists of definitions, expressions, relations,
homonyms, difficulties and citations. A translation page (French-English and
English-French dictionaries) holds words, each one broken down into
subheaders, items, meanings and phrases.

All records are plain data. Optional fields default to "" or [] and list
fields keep document order.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, get_args, get_origin, get_type_hints

# Metadata flag: compare URL lists by their trailing page ID only
PAGE_ID_COMPARISON = {"compare": "page_id"}


def _from_value(hint: Any, value: Any) -> Any:
    if get_origin(hint) is list:
        (item_hint,) = get_args(hint)
        return [_from_value(item_hint, v) for v in value]
    if dataclasses.is_dataclass(hint):
        return from_dict(hint, value)
    return value


def from_dict(cls: type, data: dict) -> Any:
    """Build a record of type cls from a dict shaped like its to_dict()."""
    hints = get_type_hints(cls)
    kwargs = {
        f.name: _from_value(hints[f.name], data[f.name])
        for f in dataclasses.fields(cls)
        if f.name in data
    }
    return cls(**kwargs)


class Record:
    """Mixin giving records a dict round trip for JSON fixtures."""

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict):
        return from_dict(cls, data)


# ============================================================================
# Definition pages
# ============================================================================


@dataclass
class DefinitionHeader(Record):
    text: str = ""
    audio: str = ""
    category: str = ""


@dataclass
class Definition(Record):
    """
    An item from DÉFINITIONS.

    broad_context is the large red heading above a group of definitions;
    narrow_context is the small red qualifier in front of the text.
    """
    text: str = ""
    broad_context: str = ""
    narrow_context: str = ""


@dataclass
class Expression(Record):
    """An item from EXPRESSIONS, with the same contexts as a Definition."""
    text: str = ""
    broad_context: str = ""
    narrow_context: str = ""


@dataclass
class Relation(Record):
    """
    An item from SYNONYMES ET CONTRAIRES.

    text usually, but not always, repeats the start of a Definition's text.
    """
    text: str = ""
    synonyms: list[str] = field(default_factory=list)
    antonyms: list[str] = field(default_factory=list)


@dataclass
class Homonym(Record):
    text: str = ""
    category: str = ""


@dataclass
class Difficulty(Record):
    category: str = ""
    text: str = ""


@dataclass
class Citation(Record):
    id: int = 0
    author: str = ""
    author_info: str = ""
    text: str = ""
    info: str = ""


@dataclass
class DefinitionPage(Record):
    """
    A page from the monolingual French dictionary.

    When the requested word does not exist, not_found is set and see_also
    holds the search suggestions offered instead, if any.
    """
    page_id: int = 0
    header: DefinitionHeader = field(default_factory=DefinitionHeader)
    definitions: list[Definition] = field(default_factory=list)
    expressions: list[Expression] = field(default_factory=list)
    relations: list[Relation] = field(default_factory=list)
    homonyms: list[Homonym] = field(default_factory=list)
    difficulties: list[Difficulty] = field(default_factory=list)
    citations: list[Citation] = field(default_factory=list)
    see_also: list[str] = field(default_factory=list, metadata=PAGE_ID_COMPARISON)
    not_found: bool = False


# ============================================================================
# Translation pages
# ============================================================================


@dataclass
class TranslationHeader(Record):
    """
    The header of a word.

    alt_text is the alternate form shown in parentheses, usually the
    feminine of a masculine word; phonetic is the IPA transcription.
    """
    text: str = ""
    alt_text: str = ""
    phonetic: str = ""
    audio: str = ""
    category: str = ""


@dataclass
class Meaning(Record):
    """
    A translation of a word.

    The three contexts are the red qualifiers: context in square brackets,
    domain in capitals, meta (register, dialect) in parentheses.
    """
    text: str = ""
    context: str = ""
    domain: str = ""
    meta: str = ""

    def is_empty(self) -> bool:
        return not (self.text or self.context or self.domain or self.meta)


@dataclass
class Phrase(Record):
    """
    An example phrase in the source language with its translation.

    is_expression marks phrases shown in the blue "EXPR" box. Subphrases come
    from the lettered list under a phrase; they never have subphrases of
    their own.
    """
    source_text: str = ""
    target_text: str = ""
    source_audio: str = ""
    target_audio: str = ""
    context: str = ""
    domain: str = ""
    meta: str = ""
    is_expression: bool = False
    subphrases: list["Phrase"] = field(default_factory=list)

    def mark_expression(self, flag: bool) -> None:
        """Set is_expression on the phrase and all of its subphrases."""
        self.is_expression = flag
        for subphrase in self.subphrases:
            subphrase.is_expression = flag


@dataclass
class Item(Record):
    meanings: list[Meaning] = field(default_factory=list)
    phrases: list[Phrase] = field(default_factory=list)


@dataclass
class Subheader(Record):
    """A titled group of items; most words have one with an empty title."""
    title: str = ""
    items: list[Item] = field(default_factory=list)


@dataclass
class Word(Record):
    """
    One headword on a translation page.

    code is not unique: only the first word's code is guaranteed to be the
    page ID.
    """
    code: int = 0
    header: TranslationHeader = field(default_factory=TranslationHeader)
    subheaders: list[Subheader] = field(default_factory=list)


@dataclass
class TranslationPage(Record):
    page_id: int = 0
    words: list[Word] = field(default_factory=list)
    see_also: list[str] = field(default_factory=list, metadata=PAGE_ID_COMPARISON)
    not_found: bool = False
