"""Tests for larousse_scraper.definition module."""

import logging

import pytest
from bs4 import BeautifulSoup

from larousse_scraper import definition
from larousse_scraper.diff import diff
from larousse_scraper.errors import StructuralFailure
from larousse_scraper.models import Citation, Definition, Expression, Homonym, Relation
from larousse_scraper.parse import load_document


def first(markup: str):
    """Parse markup and return its first top-level node."""
    return BeautifulSoup(markup, "html.parser").contents[0]


# ============================================================================
# Header Tests
# ============================================================================


class TestParseHeader:
    """Tests for parse_header and parse_header_text."""

    def test_full_header(self, definition_doc):
        header = definition.parse_header(definition_doc)
        assert header.text == "vert, verte"
        assert header.audio == "https://voix.larousse.fr/francais/81436fra2.mp3"
        assert header.category == "adjectif"

    def test_joins_fragments_with_comma(self):
        doc = load_document("<h2><audio></audio>beau<audio></audio>bel<audio></audio>belle</h2>")
        assert definition.parse_header_text(doc) == "beau, bel, belle"

    def test_no_separator_after_comma(self):
        doc = load_document("<h2><audio></audio>vert,<audio></audio>verte</h2>")
        assert definition.parse_header_text(doc) == "vert,verte"

    def test_missing_text_fails(self):
        doc = load_document('<h2 class="AdresseDefinition">vert</h2>')
        with pytest.raises(StructuralFailure) as excinfo:
            definition.parse_header(doc)
        assert excinfo.value.function == "parse_header_text"

    def test_optional_fields_default_to_empty(self):
        doc = load_document("<h2><audio></audio>auto</h2>")
        header = definition.parse_header(doc)
        assert header.text == "auto"
        assert header.audio == ""
        assert header.category == ""


# ============================================================================
# Section Item Tests
# ============================================================================


class TestParseDefinition:
    """Tests for parse_definition function."""

    def test_contexts_and_text(self):
        node = first(
            '<li class="DivisionDefinition"><p class="RubriqueDefinition">Botanique</p>'
            '<span class="indicateurDefinition">Spécialement</span>Qui a de la sève.</li>'
        )
        assert definition.parse_definition(node) == Definition(
            text="Qui a de la sève.",
            broad_context="Botanique",
            narrow_context="Spécialement",
        )

    def test_accumulates_with_single_spaces(self):
        node = first('<li class="DivisionDefinition"><b>1.</b>Se dit <i>du vin</i> jeune.</li>')
        assert definition.parse_definition(node).text == "1. Se dit du vin jeune."


class TestParseExpression:
    """Tests for parse_expression function."""

    def test_removes_leading_context_once(self):
        node = first(
            '<li class="Locution"><h2 class="AdresseLocution">'
            '<span class="IndicateurLocution">Familier</span> En voir des vertes et des pas mûres,</h2>'
            "<span>subir des épreuves .</span></li>"
        )
        assert definition.parse_expression(node) == Expression(
            text="En voir des vertes et des pas mûres, subir des épreuves.",
            broad_context="",
            narrow_context="Familier",
        )

    def test_apostrophe_cleanup(self):
        node = first(
            '<li class="Locution"><h2 class="AdresseLocution">Mettre l\' argent au vert,</h2>'
            "<span>le placer.</span></li>"
        )
        assert definition.parse_expression(node).text == "Mettre l'argent au vert, le placer."

    def test_heading_without_sibling(self):
        node = first('<li class="Locution"><h2 class="AdresseLocution">Au vert</h2></li>')
        assert definition.parse_expression(node).text == "Au vert"


class TestParseRelation:
    """Tests for parse_relation function."""

    def test_synonyms_and_antonyms(self):
        node = first(
            '<div class="SensSynonymes"><b>Qui n\'est pas mûr</b><p>Synonymes :</p>'
            "<p>acide - aigre</p><p>Contraires :</p><p>mûr</p></div>"
        )
        assert definition.parse_relation(node) == Relation(
            text="Qui n'est pas mûr",
            synonyms=["acide", "aigre"],
            antonyms=["mûr"],
        )

    def test_antonyms_only(self):
        node = first('<div class="SensSynonymes"><b>x</b><p>Contraires :</p><p>a - b</p></div>')
        relation = definition.parse_relation(node)
        assert relation.synonyms == []
        assert relation.antonyms == ["a", "b"]

    def test_missing_label_fails(self):
        node = first('<div class="SensSynonymes"><b>x</b></div>')
        with pytest.raises(StructuralFailure):
            definition.parse_relation(node)

    def test_missing_list_fails(self):
        node = first('<div class="SensSynonymes"><b>x</b><p>Synonymes :</p></div>')
        with pytest.raises(StructuralFailure):
            definition.parse_relation(node)


class TestParseHomonym:
    """Tests for parse_homonym function."""

    def test_cross_reference_preferred(self):
        node = first('<li class="Homonyme"><b>bold</b><a class="Renvois">ver</a></li>')
        assert definition.parse_homonym(node) == Homonym(text="ver", category="")

    def test_missing_text_fails(self):
        with pytest.raises(StructuralFailure):
            definition.parse_homonym(first('<li class="Homonyme"><span>x</span></li>'))


class TestParseDifficulty:
    """Tests for parse_difficulty function."""

    def test_concatenates_following_siblings(self):
        node = first(
            '<li class="Difficulte"><p class="TypeDifficulte">Emploi</p>'
            "<p>Premier.</p><p>Second.</p></li>"
        )
        difficulty = definition.parse_difficulty(node)
        assert difficulty.category == "Emploi"
        assert difficulty.text == "Premier.Second."

    def test_missing_category_fails(self):
        with pytest.raises(StructuralFailure):
            definition.parse_difficulty(first('<li class="Difficulte"><p>x</p></li>'))


class TestParseCitation:
    """Tests for parse_citation function."""

    def test_minimal_citation(self):
        node = first('<li class="Citation" id="7"><span class="TexteCitation">Texte.</span></li>')
        assert definition.parse_citation(node) == Citation(id=7, text="Texte.")

    @pytest.mark.parametrize("markup", [
        '<li class="Citation"><span class="TexteCitation">x</span></li>',
        '<li class="Citation" id="abc"><span class="TexteCitation">x</span></li>',
        '<li class="Citation" id="7"><span>x</span></li>',
    ])
    def test_required_fields(self, markup):
        with pytest.raises(StructuralFailure) as excinfo:
            definition.parse_citation(first(markup))
        assert excinfo.value.function == "parse_citation"


# ============================================================================
# Page Tests
# ============================================================================


class TestExtractDefinitionPage:
    """Tests for extract_definition_page function."""

    def test_matches_golden_record(self, definition_doc, expected_definition_page):
        page = definition.extract_definition_page(definition_doc)
        assert diff(expected_definition_page, page) == ("", True)

    def test_empty_definition_item_ignored(self, definition_doc):
        page = definition.extract_definition_page(definition_doc)
        assert len(page.definitions) == 2

    def test_word_not_found_page(self, not_found_doc):
        page = definition.extract_definition_page(not_found_doc)
        assert page.not_found is True
        assert page.page_id == 0
        assert page.see_also == [
            "https://larousse.fr/dictionnaires/francais/vert/81436",
            "https://larousse.fr/dictionnaires/francais/verte/81437",
        ]
        assert page.definitions == []
        assert page.expressions == []
        assert page.relations == []
        assert page.homonyms == []
        assert page.difficulties == []
        assert page.citations == []

    def test_broken_item_fails_page(self, definition_html):
        html = definition_html.replace('<li class="Citation" id="1235">', '<li class="Citation">')
        with pytest.raises(StructuralFailure):
            definition.extract_definition_page(load_document(html))

    def test_skip_failed_drops_broken_item(self, definition_html, caplog):
        html = definition_html.replace('<li class="Citation" id="1235">', '<li class="Citation">')
        with caplog.at_level(logging.WARNING, logger="larousse_scraper.definition"):
            page = definition.extract_definition_page(load_document(html), skip_failed=True)
        assert [citation.id for citation in page.citations] == [1234]
        assert "Skipping citation item" in caplog.text
