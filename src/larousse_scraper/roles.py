"""
Classifies page nodes into semantic roles.

Every extractor works on roles rather than on raw tag/class strings. The
rules are closed: a node that matches none of them is Role.NONE and is
ignored. Class attributes are compared as exact, case-sensitive strings.
"""

from enum import Enum

from bs4 import PageElement

from larousse_scraper.nodes import (
    Predicate,
    attr,
    class_string,
    get_text,
    is_text,
    tag_name,
)

# Diagnostic banners shown on "word not found" pages
SUGGESTIONS_TEXT = "Suggestions proposées par le correcteur"
NO_SUGGESTIONS_TEXT = "Nous n'avons aucune suggestion pour votre recherche"


class Role(Enum):
    NONE = "none"

    # Page-level
    PAGE_LINK = "page-link"
    AUDIO = "audio"
    SIMILAR_WORD = "similar-word"
    CORRECTOR = "corrector"
    SUGGESTIONS_BANNER = "suggestions-banner"
    NO_SUGGESTIONS_BANNER = "no-suggestions-banner"

    # Definition pages
    HEADER_TEXT = "header-text"
    HEADER_CATEGORY = "header-category"
    DEFINITION = "definition"
    BROAD_CONTEXT = "broad-context"
    NARROW_CONTEXT = "narrow-context"
    EXPRESSION = "expression"
    EXPRESSION_TITLE = "expression-title"
    EXPRESSION_CONTEXT = "expression-context"
    RELATION = "relation"
    RELATION_HEADING = "relation-heading"
    HOMONYM = "homonym"
    HOMONYM_CATEGORY = "homonym-category"
    DIFFICULTY = "difficulty"
    DIFFICULTY_CATEGORY = "difficulty-category"
    DIFFICULTY_TEXT = "difficulty-text"
    CITATION = "citation"
    CITATION_AUTHOR = "citation-author"
    CITATION_AUTHOR_INFO = "citation-author-info"
    CITATION_TEXT = "citation-text"
    CITATION_INFO = "citation-info"

    # Translation pages: structure
    ENTRY_ZONE = "entry-zone"
    HEADWORD = "headword"
    ALT_HEADWORD = "alt-headword"
    PHONETIC = "phonetic"
    ENTRY_AUDIO_LINK = "entry-audio-link"
    GRAMMAR_ZONE = "grammar-zone"
    GRAMMATICAL_CATEGORY = "grammatical-category"
    SUBHEADER_BLOCK = "subheader-block"
    SUBHEADER_TITLE = "subheader-title"
    ITEM = "item"
    SEMANTIC_DIVISION = "semantic-division"
    PHRASE_ZONE_LEAD = "phrase-zone-lead"
    PHRASE_ZONE = "phrase-zone"
    EXPRESSION_BLOCK = "expression-block"
    SECONDARY_PHRASE_ZONE = "secondary-phrase-zone"
    SUBPHRASE_LIST = "subphrase-list"

    # Translation pages: meaning and phrase fields
    TRANSLATION = "translation"
    GLOSS = "gloss"
    CROSS_REFERENCE = "cross-reference"
    CONTEXT = "context"
    DOMAIN = "domain"
    META = "meta"
    PHRASE_SOURCE = "phrase-source"
    PHRASE_TARGET = "phrase-target"
    PHRASE_TARGET_META = "phrase-target-meta"
    SOURCE_AUDIO_LINK = "source-audio-link"
    TARGET_AUDIO_LINK = "target-audio-link"
    GENDER = "gender"
    ALTERNATIVE = "alternative"
    CONJUGATION_LINK = "conjugation-link"


# Roles bound to a (tag, class) pair
TAGGED_ROLES: dict[tuple[str, str], Role] = {
    ("li", "DivisionDefinition"): Role.DEFINITION,
    ("p", "DivisionDefinition"): Role.RELATION_HEADING,
    ("div", "DivisionDefinition"): Role.RELATION_HEADING,
    ("p", "RubriqueDefinition"): Role.BROAD_CONTEXT,
    ("span", "indicateurDefinition"): Role.NARROW_CONTEXT,
    ("li", "Locution"): Role.EXPRESSION,
    ("h2", "AdresseLocution"): Role.EXPRESSION_TITLE,
    ("span", "IndicateurLocution"): Role.EXPRESSION_CONTEXT,
    ("div", "SensSynonymes"): Role.RELATION,
    ("li", "Homonyme"): Role.HOMONYM,
    ("li", "Difficulte"): Role.DIFFICULTY,
    ("p", "TypeDifficulte"): Role.DIFFICULTY_CATEGORY,
    ("p", "DefinitionDifficulte"): Role.DIFFICULTY_TEXT,
    ("li", "Citation"): Role.CITATION,
    ("span", "AuteurCitation"): Role.CITATION_AUTHOR,
    ("span", "InfoAuteurCitation"): Role.CITATION_AUTHOR_INFO,
    ("span", "TexteCitation"): Role.CITATION_TEXT,
    ("span", "InfoCitation"): Role.CITATION_INFO,
    ("h1", "icon-question-sign"): Role.SUGGESTIONS_BANNER,
    ("p", "err"): Role.NO_SUGGESTIONS_BANNER,
    ("span", "oubien"): Role.ALTERNATIVE,
}

# Roles carried by the class alone, whatever the tag
CLASS_ROLES: dict[str, Role] = {
    "item-word": Role.SIMILAR_WORD,
    "corrector": Role.CORRECTOR,
    "CatGramHomonyme": Role.HOMONYM_CATEGORY,
    "ZoneEntree": Role.ENTRY_ZONE,
    "Adresse": Role.HEADWORD,
    "FormeFlechieAdresse": Role.ALT_HEADWORD,
    "Phonetique": Role.PHONETIC,
    "lienson": Role.ENTRY_AUDIO_LINK,
    "ZoneGram": Role.GRAMMAR_ZONE,
    "CategorieGrammaticale": Role.GRAMMATICAL_CATEGORY,
    "itemBLSEM1": Role.SUBHEADER_BLOCK,
    "itemBLSEM": Role.SUBHEADER_BLOCK,
    "Indicateur2": Role.SUBHEADER_TITLE,
    "itemZONESEM": Role.ITEM,
    "division-semantique": Role.SEMANTIC_DIVISION,
    "ZoneExpression1": Role.PHRASE_ZONE_LEAD,
    "ZoneExpression": Role.PHRASE_ZONE,
    "BlocExpression": Role.EXPRESSION_BLOCK,
    "ZoneExpression2": Role.SECONDARY_PHRASE_ZONE,
    "DivisionExpression": Role.SUBPHRASE_LIST,
    "Traduction": Role.TRANSLATION,
    "Glose2": Role.GLOSS,
    "Renvois": Role.CROSS_REFERENCE,
    "Indicateur": Role.CONTEXT,
    "IndicateurDomaine": Role.DOMAIN,
    "Metalangue": Role.META,
    "Locution2": Role.PHRASE_SOURCE,
    "Traduction2": Role.PHRASE_TARGET,
    "Metalangue2": Role.PHRASE_TARGET_META,
    "lienson3": Role.SOURCE_AUDIO_LINK,
    "lienson2": Role.TARGET_AUDIO_LINK,
    "Genre": Role.GENDER,
    "lienconj2": Role.CONJUGATION_LINK,
}


def _is_category_paragraph(node: PageElement | None) -> bool:
    return tag_name(node) == "p" and class_string(node) == "CatgramDefinition"


def _is_relation_start(node: PageElement | None) -> bool:
    # Most relations open with <b>; the last one on some pages ("beau") opens
    # with a DivisionDefinition block instead
    return tag_name(node) == "b" or _classify_tag(node) is Role.RELATION_HEADING


def _classify_text(node: PageElement) -> Role:
    if tag_name(node.previous_sibling) == "audio":
        return Role.HEADER_TEXT
    if _is_category_paragraph(node.parent):
        return Role.HEADER_CATEGORY
    return Role.NONE


def _classify_tag(node: PageElement | None) -> Role:
    tag = tag_name(node)
    if not tag:
        return Role.NONE
    if tag == "audio":
        return Role.AUDIO
    if tag == "link":
        return Role.PAGE_LINK if attr(node, "rel") == "canonical" else Role.NONE

    cls = class_string(node)
    role = TAGGED_ROLES.get((tag, cls))
    if role is not None:
        return role
    return CLASS_ROLES.get(cls, Role.NONE)


def classify(node: PageElement | None) -> Role:
    """Map a node to its semantic role; unknown nodes are Role.NONE."""
    if node is None:
        return Role.NONE
    if is_text(node):
        return _classify_text(node)

    role = _classify_tag(node)
    if role is Role.DEFINITION:
        # Some pages carry an empty definition item ("delà")
        return role if node.contents else Role.NONE
    if role is Role.RELATION:
        first = node.contents[0] if node.contents else None
        return role if _is_relation_start(first) else Role.NONE
    if role is Role.SUGGESTIONS_BANNER:
        return role if get_text(node) == SUGGESTIONS_TEXT else Role.NONE
    if role is Role.NO_SUGGESTIONS_BANNER:
        return role if get_text(node) == NO_SUGGESTIONS_TEXT else Role.NONE
    if role is Role.NONE and _is_category_paragraph(node.parent):
        return Role.HEADER_CATEGORY
    return role


def by_role(*roles: Role) -> Predicate:
    """Predicate matching nodes classified as any of the given roles."""
    wanted = frozenset(roles)
    return lambda node: classify(node) in wanted
