"""
Extracts records from pages of the monolingual French dictionary.

Page layout, using "vert" as an example:

- Header: the word with both genders ("vert, verte"), its grammatical
  category ("adjectif") and an audio link.
- DÉFINITIONS: definitions, optionally grouped under a red heading and
  prefixed with a small red qualifier.
- EXPRESSIONS: set phrases with their explanation, grouped like definitions.
- SYNONYMES ET CONTRAIRES: synonym and antonym lists for some definitions.
- HOMONYMES, DIFFICULTÉS, CITATIONS.
"""

import logging
from typing import Callable, TypeVar

from bs4 import PageElement

from larousse_scraper.errors import StructuralFailure
from larousse_scraper.models import (
    Citation,
    Definition,
    DefinitionHeader,
    DefinitionPage,
    Difficulty,
    Expression,
    Homonym,
    Relation,
)
from larousse_scraper.nodes import (
    append_text,
    attr,
    by_tag,
    children,
    find_all,
    find_first,
    first_child,
    following_siblings,
    get_text,
)
from larousse_scraper.page import (
    get_page_id,
    is_word_not_found_page,
    node_audio_url,
    search_suggestions,
    similar_words,
)
from larousse_scraper.roles import Role, by_role, classify

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Clean-up applied to expression text: (artifact, replacement)
EXPRESSION_CLEANUP = (
    ("' ", "'"),
    (" .", "."),
)


# ============================================================================
# Header
# ============================================================================


def parse_header_text(doc: PageElement) -> str:
    """Get the headword, both forms included (e.g. "vert, verte")."""
    nodes = find_all(doc, by_role(Role.HEADER_TEXT))
    if not nodes:
        raise StructuralFailure("parse_header_text", None, "Failed to find header text")

    text = ""
    for i, node in enumerate(nodes):
        if i > 0 and not text.endswith(","):
            text += ", "
        text += get_text(node)
    return text


def parse_header(doc: PageElement) -> DefinitionHeader:
    text = parse_header_text(doc)
    # Audio and category are optional ("auto" has no category)
    audio = node_audio_url(find_first(doc, by_role(Role.AUDIO)))
    category = get_text(find_first(doc, by_role(Role.HEADER_CATEGORY)))
    return DefinitionHeader(text=text, audio=audio, category=category)


# ============================================================================
# Section items
# ============================================================================


def parse_definition(node: PageElement) -> Definition:
    """Parse a DÉFINITIONS item."""
    definition = Definition()
    for child in children(node):
        role = classify(child)
        if role is Role.BROAD_CONTEXT:
            definition.broad_context = get_text(child)
        elif role is Role.NARROW_CONTEXT:
            definition.narrow_context = get_text(child)
        else:
            definition.text = append_text(definition.text, get_text(child))
    return definition


def clean_expression_text(text: str) -> str:
    for artifact, replacement in EXPRESSION_CLEANUP:
        text = text.replace(artifact, replacement)
    return text.strip(" ")


def parse_expression(node: PageElement) -> Expression:
    """Parse an EXPRESSIONS item."""
    broad_context = get_text(find_first(node, by_role(Role.BROAD_CONTEXT)))
    narrow_context = ""
    fragments = []
    for title in find_all(node, by_role(Role.EXPRESSION_TITLE)):
        context = find_first(title, by_role(Role.EXPRESSION_CONTEXT))
        if context is not None:
            narrow_context = get_text(context)

        fragment = get_text(title)
        if title.next_sibling is not None:
            fragment += " " + get_text(title.next_sibling)
        fragments.append(fragment)

    text = " ".join(fragments)
    if text.startswith(narrow_context):
        text = text.replace(narrow_context, "", 1)
    return Expression(
        text=clean_expression_text(text),
        broad_context=broad_context,
        narrow_context=narrow_context,
    )


def parse_relation(node: PageElement) -> Relation:
    """
    Parse a SYNONYMES ET CONTRAIRES item.

    Layout: heading, "Synonymes :" or "Contraires :" label, " - " separated
    list, then optionally a second label and the antonym list.
    """
    heading = first_child(node)
    if heading is None:
        raise StructuralFailure("parse_relation", node, "No relation heading")
    relation = Relation(text=get_text(heading))

    label = heading.next_sibling
    if label is None:
        raise StructuralFailure("parse_relation", node, "No label after relation heading")
    synonyms_first = get_text(label).startswith("Synonyme")

    values = label.next_sibling
    if values is None:
        raise StructuralFailure("parse_relation", node, "No list after relation label")
    if synonyms_first:
        relation.synonyms = get_text(values).split(" - ")
    else:
        relation.antonyms = get_text(values).split(" - ")
        return relation

    if values.next_sibling is None:
        return relation
    antonyms = values.next_sibling.next_sibling
    if antonyms is None:
        raise StructuralFailure("parse_relation", node, "No antonym list after label")
    relation.antonyms = get_text(antonyms).split(" - ")
    return relation


def parse_homonym(node: PageElement) -> Homonym:
    """Parse a HOMONYMES item."""
    text_node = find_first(node, by_role(Role.CROSS_REFERENCE))
    if text_node is None:
        text_node = find_first(node, by_tag("b"))
    if text_node is None:
        raise StructuralFailure("parse_homonym", node, "Can't find homonym text")
    # Category is optional ("brique")
    category = get_text(find_first(node, by_role(Role.HOMONYM_CATEGORY)))
    return Homonym(text=get_text(text_node), category=category)


def parse_difficulty(node: PageElement) -> Difficulty:
    """Parse a DIFFICULTÉS item: its category, then everything after it."""
    category = find_first(node, by_role(Role.DIFFICULTY_CATEGORY))
    if category is None:
        raise StructuralFailure("parse_difficulty", node, "Can't find difficulty category")
    siblings = list(following_siblings(category.next_sibling))
    return Difficulty(
        category=get_text(category),
        text="".join(get_text(sibling) for sibling in siblings),
    )


def parse_citation(node: PageElement) -> Citation:
    """Parse a CITATIONS item. Author fields and info are optional ("arbre")."""
    raw_id = attr(node, "id")
    try:
        citation_id = int(raw_id)
    except ValueError:
        raise StructuralFailure("parse_citation", node, f"Bad citation id {raw_id!r}") from None

    text = find_first(node, by_role(Role.CITATION_TEXT))
    if text is None:
        raise StructuralFailure("parse_citation", node, "Can't find citation text")

    return Citation(
        id=citation_id,
        author=get_text(find_first(node, by_role(Role.CITATION_AUTHOR))),
        author_info=get_text(find_first(node, by_role(Role.CITATION_AUTHOR_INFO))),
        text=get_text(text),
        info=get_text(find_first(node, by_role(Role.CITATION_INFO))),
    )


# ============================================================================
# Sections
# ============================================================================


def parse_section(
    doc: PageElement,
    role: Role,
    parse_item: Callable[[PageElement], T],
    skip_failed: bool = False,
) -> list[T]:
    """Parse every node of a section role, in document order."""
    records = []
    for node in find_all(doc, by_role(role)):
        try:
            records.append(parse_item(node))
        except StructuralFailure as err:
            if not skip_failed:
                raise
            logger.warning("Skipping %s item: %s", role.value, err)
    logger.debug("Parsed %d %s items", len(records), role.value)
    return records


def extract_definition_page(doc: PageElement, *, skip_failed: bool = False) -> DefinitionPage:
    """
    Extract a DefinitionPage from a parsed page.

    A "word not found" page only yields its search suggestions. With
    skip_failed, a malformed section item is logged and left out instead of
    failing the whole page.
    """
    if is_word_not_found_page(doc):
        logger.debug("Word not found page")
        return DefinitionPage(see_also=search_suggestions(doc), not_found=True)

    return DefinitionPage(
        page_id=get_page_id(doc),
        header=parse_header(doc),
        definitions=parse_section(doc, Role.DEFINITION, parse_definition, skip_failed),
        expressions=parse_section(doc, Role.EXPRESSION, parse_expression, skip_failed),
        relations=parse_section(doc, Role.RELATION, parse_relation, skip_failed),
        homonyms=parse_section(doc, Role.HOMONYM, parse_homonym, skip_failed),
        difficulties=parse_section(doc, Role.DIFFICULTY, parse_difficulty, skip_failed),
        citations=parse_section(doc, Role.CITATION, parse_citation, skip_failed),
        see_also=similar_words(doc),
    )
