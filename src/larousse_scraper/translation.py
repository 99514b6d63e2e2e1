"""
Extracts records from pages of the French-English and English-French
dictionaries.

Page layout, using the French-English page for "court" as an example:

- The page holds several words ("court (f courte)" ... "tout court"). Each
  word is an entry zone (header) followed by a content block.
- The header gives the headword, its alternate form, IPA, audio and
  grammatical category: "court (f courte) [kur, kurt] adjectif".
- Some words split their content under black, bold subheaders ("[DANS
  L'ESPACE]", "[DANS LE TEMPS]"). Words without them get a single untitled
  subheader, so both kinds look the same once extracted.
- A subheader holds numbered items. An item starts with its meanings (red
  context followed by the blue translation) and goes on with example
  phrases. A phrase may carry a lettered list of subphrases, and phrases in
  the blue "EXPR" box are expressions.
"""

import logging

from bs4 import PageElement

from larousse_scraper.codes import resolve_codes
from larousse_scraper.errors import StructuralFailure
from larousse_scraper.models import (
    Item,
    Meaning,
    Phrase,
    Subheader,
    TranslationHeader,
    TranslationPage,
    Word,
)
from larousse_scraper.nodes import (
    append_text,
    by_tag,
    children,
    class_string,
    find_all,
    find_first,
    first_child,
    get_text,
    is_tag,
    is_text,
    is_whitespace_node,
    tag_name,
)
from larousse_scraper.page import (
    get_page_id,
    is_word_not_found_page,
    search_suggestions,
    sibling_audio_url,
    similar_words,
)
from larousse_scraper.roles import Role, by_role, classify

logger = logging.getLogger(__name__)

# Arrow introducing a cross-reference inside a meaning ("coup de fil")
REFERENCE_ARROW = "→"
# Interpunct separating alternate forms inside a meaning
INTERPUNCT = "·"

# Field classes that still belong to an item's first meaning
FIRST_MEANING_ROLES = frozenset({
    Role.CONTEXT,
    Role.TARGET_AUDIO_LINK,
    Role.TRANSLATION,
    Role.DOMAIN,
    Role.META,
    Role.SUBHEADER_TITLE,
    Role.CROSS_REFERENCE,
    Role.GLOSS,
})

# Fragments accumulated into a phrase's target text
PHRASE_TARGET_ROLES = frozenset({
    Role.GLOSS,
    Role.PHRASE_TARGET,
    Role.CROSS_REFERENCE,
    Role.PHRASE_TARGET_META,
})


# ============================================================================
# Text fields
# ============================================================================


def translation_text(node: PageElement) -> str:
    """
    Get the text of a translation node.

    Gender markers get a space before them, "ou bien" markers read " ou ",
    and conjugation links and target-language meta notes are dropped.
    """
    text = ""
    for child in children(node):
        role = classify(child)
        fragment = get_text(child)
        if role is Role.GENDER or text.endswith(","):
            text += " "

        if role is Role.ALTERNATIVE:
            text += " ou "
        elif role not in (Role.CONJUGATION_LINK, Role.PHRASE_TARGET_META):
            if fragment.startswith("("):
                text += " "
            text += fragment
    return text


# ============================================================================
# Header
# ============================================================================


def parse_headword(entry: PageElement) -> str:
    node = find_first(entry, by_role(Role.HEADWORD))
    if node is None:
        raise StructuralFailure("parse_headword", entry, "Failed to find headword")
    return get_text(node)


def parse_alt_headword(entry: PageElement) -> str:
    text = get_text(find_first(entry, by_role(Role.ALT_HEADWORD)))
    if text.startswith("( "):
        text = "(" + text[2:]
    return text


def parse_phonetic(entry: PageElement) -> str:
    return "".join(get_text(node) for node in find_all(entry, by_role(Role.PHONETIC)))


def parse_entry_audio(entry: PageElement) -> str:
    link = find_first(entry, by_role(Role.ENTRY_AUDIO_LINK))
    if link is None:
        return ""
    return sibling_audio_url(link)


def parse_entry_category(entry: PageElement) -> str:
    node = find_first(entry, by_role(Role.GRAMMAR_ZONE))
    if node is None:
        node = find_first(entry, by_role(Role.GRAMMATICAL_CATEGORY))
    if node is None:
        return ""
    text = get_text(node).replace("Conjugaison", "").replace("  ", " ")
    return text.strip(" ")


def parse_entry(entry: PageElement) -> TranslationHeader:
    """Parse a word's entry zone into its header."""
    return TranslationHeader(
        text=parse_headword(entry),
        alt_text=parse_alt_headword(entry),
        phonetic=parse_phonetic(entry),
        audio=parse_entry_audio(entry),
        category=parse_entry_category(entry),
    )


# ============================================================================
# Meanings
# ============================================================================


def update_meaning(meaning: Meaning, node: PageElement) -> None:
    """Apply a meaning field node to meaning."""
    role = classify(node)
    if role in (Role.CROSS_REFERENCE, Role.GLOSS):
        meaning.text = get_text(node)
    elif role is Role.TRANSLATION:
        meaning.text = append_text(meaning.text, translation_text(node))
    elif role is Role.CONTEXT:
        meaning.context = get_text(node)
    elif role is Role.DOMAIN:
        meaning.domain = get_text(node).upper()
    elif role is Role.META:
        meaning.meta = get_text(node)


def belongs_to_first_meaning(node: PageElement | None) -> bool:
    if node is None:
        return False
    if tag_name(node) == "audio" or is_whitespace_node(node):
        return True
    if is_text(node) and (REFERENCE_ARROW in node or INTERPUNCT in node):
        return True
    return classify(node) in FIRST_MEANING_ROLES


def build_meanings(item: PageElement) -> list[Meaning]:
    """
    Build the meanings of an item.

    The first meaning is the run of meaning fields opening the item. Every
    semantic division nested in the item adds the first meaning it opens
    with.
    """
    node = first_child(item)
    if is_whitespace_node(node):
        node = node.next_sibling

    meaning = Meaning()
    while belongs_to_first_meaning(node):
        update_meaning(meaning, node)
        node = node.next_sibling
    meanings = [meaning]

    for division in find_all(item, by_role(Role.SEMANTIC_DIVISION)):
        if division is item:
            continue
        nested = build_meanings(division)
        if nested:
            meanings.append(nested[0])

    if len(meanings) == 1 and meanings[0].is_empty():
        return []
    return meanings


# ============================================================================
# Phrases
# ============================================================================


def update_phrase(phrase: Phrase, node: PageElement) -> None:
    """Apply a phrase field node to phrase."""
    role = classify(node)
    if role is Role.PHRASE_SOURCE:
        phrase.source_text = get_text(node)
        # The source audio link is sometimes nested in the source text
        # ("vert de rage", "à couper au couteau")
        nested = find_first(node, by_role(Role.SOURCE_AUDIO_LINK))
        if nested is not None:
            phrase.source_audio = sibling_audio_url(nested)
    elif role in PHRASE_TARGET_ROLES:
        phrase.target_text = append_text(phrase.target_text, translation_text(node))
    elif role is Role.SOURCE_AUDIO_LINK:
        phrase.source_audio = sibling_audio_url(node)
    elif role is Role.TARGET_AUDIO_LINK:
        phrase.target_audio = sibling_audio_url(node)
    elif role is Role.CONTEXT:
        phrase.context = get_text(node)
    elif role is Role.DOMAIN:
        phrase.domain = get_text(node).upper()
    elif role is Role.META:
        phrase.meta = get_text(node)


def build_phrase(zone: PageElement, is_expression: bool = False, nested: bool = False) -> Phrase:
    """
    Build a phrase from its zone's children.

    Subphrases inherit is_expression as it stands during the walk. Subphrase
    lists inside a subphrase are not followed.
    """
    phrase = Phrase(is_expression=is_expression)
    for child in children(zone):
        update_phrase(phrase, child)
        if nested or classify(child) is not Role.SUBPHRASE_LIST:
            continue
        for li in find_all(child, by_tag("li")):
            phrase.subphrases.append(build_phrase(li, phrase.is_expression, nested=True))
    return phrase


def build_expressions(item: PageElement) -> list[Phrase]:
    """Build the blue "EXPR" phrases of an item."""
    block = find_first(item, by_role(Role.EXPRESSION_BLOCK))
    if block is None:
        return []

    expressions = [build_phrase(block)]
    for zone in find_all(item, by_role(Role.SECONDARY_PHRASE_ZONE)):
        expressions.append(build_phrase(zone))
    for expression in expressions:
        expression.mark_expression(True)
    return expressions


def build_phrases(item: PageElement) -> list[Phrase]:
    zones = find_all(item, by_role(Role.PHRASE_ZONE_LEAD))
    zones += find_all(item, by_role(Role.PHRASE_ZONE))
    phrases = [build_phrase(zone) for zone in zones]
    return phrases + build_expressions(item)


# ============================================================================
# Items, subheaders and words
# ============================================================================


def build_item(node: PageElement) -> Item:
    return Item(meanings=build_meanings(node), phrases=build_phrases(node))


def build_items(block: PageElement) -> list[Item]:
    """Build the items of a block; a block without item markers is one item."""
    nodes = find_all(block, by_role(Role.ITEM))
    if not nodes:
        nodes = [block]
    return [build_item(node) for node in nodes]


def build_subheader(block: PageElement) -> Subheader:
    # Some subheaders have no title (en->fr "make")
    title = get_text(find_first(block, by_role(Role.SUBHEADER_TITLE)))
    return Subheader(title=title, items=build_items(block))


def build_subheaders(content: PageElement) -> list[Subheader]:
    """
    Build the subheaders of a word's content block.

    Without any subheader block the whole content sits under one untitled
    subheader.
    """
    blocks = find_all(content, by_role(Role.SUBHEADER_BLOCK))
    if not blocks:
        logger.debug("Content without subheaders")
        return [Subheader(title="", items=build_items(content))]
    logger.debug("Content with %d subheaders", len(blocks))
    return [build_subheader(block) for block in blocks]


def build_word(entry: PageElement, code: int) -> Word:
    """Build a word from its entry zone; its content block follows it."""
    content = entry.next_sibling
    if not is_tag(content):
        raise StructuralFailure("build_word", entry, "No content block after entry zone")
    return Word(code=code, header=parse_entry(entry), subheaders=build_subheaders(content))


def extract_words(doc: PageElement, skip_failed: bool = False) -> list[Word]:
    """
    Extract every word of a page, in document order.

    With skip_failed, a word that can't be extracted is logged and left out.
    """
    entries = find_all(doc, by_role(Role.ENTRY_ZONE))
    codes = resolve_codes(doc, entries)

    words = []
    for index, (entry, code) in enumerate(zip(entries, codes)):
        try:
            words.append(build_word(entry, code))
        except StructuralFailure as err:
            if not skip_failed:
                raise StructuralFailure("extract_words", entry, f"Word {index}: {err}") from err
            logger.warning("Skipping word %d (%s): %s", index, class_string(entry), err)
    return words


def extract_translation_page(doc: PageElement, *, skip_failed: bool = False) -> TranslationPage:
    """
    Extract a TranslationPage from a parsed page.

    A "word not found" page only yields its search suggestions.
    """
    if is_word_not_found_page(doc):
        logger.debug("Word not found page")
        return TranslationPage(see_also=search_suggestions(doc), not_found=True)

    return TranslationPage(
        page_id=get_page_id(doc),
        words=extract_words(doc, skip_failed),
        see_also=similar_words(doc),
    )
