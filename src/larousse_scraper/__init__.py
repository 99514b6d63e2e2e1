"""
larousse_scraper - Extract structured records from Larousse dictionary pages.

This package provides tools for:
- Classifying page nodes into semantic roles (roles)
- Extracting monolingual definition pages (definition)
- Extracting bilingual translation pages (translation)
- Comparing extracted records against golden ones (diff)
- Processing saved HTML pages into JSON (parse)
"""

from larousse_scraper.codes import (
    resolve_code,
    resolve_codes,
    word_code,
)

from larousse_scraper.definition import extract_definition_page

from larousse_scraper.diff import (
    Difference,
    diff,
    first_difference,
)

from larousse_scraper.errors import (
    LarousseError,
    StructuralFailure,
)

from larousse_scraper.models import (
    Citation,
    Definition,
    DefinitionHeader,
    DefinitionPage,
    Difficulty,
    Expression,
    Homonym,
    Item,
    Meaning,
    Phrase,
    Relation,
    Subheader,
    TranslationHeader,
    TranslationPage,
    Word,
)

from larousse_scraper.nodes import (
    find_all,
    find_first,
    get_text,
)

from larousse_scraper.page import (
    audio_url,
    get_page_id,
    is_larousse_url,
    is_word_not_found_page,
    search_suggestions,
    similar_words,
)

from larousse_scraper.parse import (
    extract_page,
    load_document,
    load_file,
    page_kind,
    process_directory,
    process_file,
)

from larousse_scraper.roles import (
    Role,
    by_role,
    classify,
)

from larousse_scraper.translation import extract_translation_page

__version__ = "0.1.0"
