"""Tests for larousse_scraper.page module."""

import pytest
from bs4 import BeautifulSoup

from larousse_scraper import page
from larousse_scraper.errors import StructuralFailure
from larousse_scraper.parse import load_document


# ============================================================================
# Page ID Tests
# ============================================================================


class TestPageIdFromUrl:
    """Tests for page_id_from_url function."""

    def test_trailing_segment(self):
        url = "https://www.larousse.fr/dictionnaires/francais/vert/81436"
        assert page.page_id_from_url(url) == 81436

    def test_non_numeric_segment(self):
        with pytest.raises(StructuralFailure) as excinfo:
            page.page_id_from_url("https://www.larousse.fr/dictionnaires/francais/vert")
        assert excinfo.value.function == "page_id_from_url"

    def test_no_slash(self):
        with pytest.raises(StructuralFailure):
            page.page_id_from_url("81436")

    def test_trailing_slash(self):
        with pytest.raises(StructuralFailure):
            page.page_id_from_url("https://www.larousse.fr/dictionnaires/francais/vert/81436/")

    @pytest.mark.parametrize("segment", ["1_000", " 81436", "81436 ", "+81436", "-1", "\u0663"])
    def test_only_plain_digits(self, segment):
        with pytest.raises(StructuralFailure):
            page.page_id_from_url(f"https://www.larousse.fr/dictionnaires/francais/vert/{segment}")


class TestGetPageId:
    """Tests for get_page_id function."""

    def test_from_canonical_link(self, definition_doc):
        assert page.get_page_id(definition_doc) == 81436

    def test_missing_link(self):
        doc = load_document("<html><head></head><body></body></html>")
        with pytest.raises(StructuralFailure) as excinfo:
            page.get_page_id(doc)
        assert excinfo.value.function == "get_page_id"


# ============================================================================
# See Also and Suggestions Tests
# ============================================================================


class TestSimilarWords:
    """Tests for similar_words function."""

    def test_skips_own_word_and_decodes(self, definition_doc):
        assert page.similar_words(definition_doc) == [
            "https://larousse.fr/dictionnaires/francais/vert-de-gris/81437",
            "https://larousse.fr/dictionnaires/francais/verdâtre/81425",
        ]

    def test_no_carousel(self):
        assert page.similar_words(load_document("<div></div>")) == []


class TestWordNotFound:
    """Tests for word not found detection and search suggestions."""

    def test_detects_corrector(self, not_found_doc, definition_doc):
        assert page.is_word_not_found_page(not_found_doc) is True
        assert page.is_word_not_found_page(definition_doc) is False

    def test_two_suggestions(self, not_found_doc):
        assert page.search_suggestions(not_found_doc) == [
            "https://larousse.fr/dictionnaires/francais/vert/81436",
            "https://larousse.fr/dictionnaires/francais/verte/81437",
        ]

    def test_no_suggestions_banner(self):
        doc = load_document(
            '<div class="corrector">'
            "<p class=\"err\">Nous n'avons aucune suggestion pour votre recherche</p>"
            "</div>"
        )
        assert page.has_suggestions(doc) is False
        assert page.search_suggestions(doc) == []

    def test_not_a_not_found_page(self, definition_doc):
        assert page.search_suggestions(definition_doc) == []


# ============================================================================
# Audio Tests
# ============================================================================


class TestAudioUrl:
    """Tests for audio_url function."""

    def test_pronunciation_path(self):
        src = "https://www.larousse.fr/dictionnaires-prononciation/fra/tts/64636fra2"
        assert page.audio_url(src) == "https://voix.larousse.fr/fra/64636fra2.mp3"

    def test_relative_src(self):
        src = "/dictionnaires-prononciation/anglais/tts/50001ang2"
        assert page.audio_url(src) == "https://voix.larousse.fr/anglais/50001ang2.mp3"

    def test_unrelated_src(self):
        assert page.audio_url("https://example.com/sound.mp3") == ""
        assert page.audio_url("") == ""

    def test_no_filename(self):
        assert page.audio_url("https://www.larousse.fr/dictionnaires-prononciation/fra/") == ""


class TestSiblingAudioUrl:
    """Tests for sibling_audio_url function."""

    SRC = "/dictionnaires-prononciation/fra/tts/1fra2"

    def link(self, markup: str):
        return BeautifulSoup(markup, "html.parser").find("a")

    def test_audio_right_after_link(self):
        link = self.link(f'<p><a class="lienson"></a><audio src="{self.SRC}"></audio></p>')
        assert page.sibling_audio_url(link) == "https://voix.larousse.fr/fra/1fra2.mp3"

    def test_audio_after_one_text_node(self):
        link = self.link(f'<p><a class="lienson"></a> <audio src="{self.SRC}"></audio></p>')
        assert page.sibling_audio_url(link) == "https://voix.larousse.fr/fra/1fra2.mp3"

    def test_other_tag_after_link(self):
        link = self.link(f'<p><a class="lienson"></a><span></span><audio src="{self.SRC}"></audio></p>')
        assert page.sibling_audio_url(link) == ""

    def test_nothing_after_link(self):
        assert page.sibling_audio_url(self.link('<p><a class="lienson"></a></p>')) == ""


# ============================================================================
# URL Validation Tests
# ============================================================================


class TestIsLarousseUrl:
    """Tests for is_larousse_url function."""

    def test_valid(self):
        assert page.is_larousse_url("https://www.larousse.fr/dictionnaires/francais/vert") == (True, "")

    @pytest.mark.parametrize("url", [
        "ftp://www.larousse.fr/dictionnaires/francais/vert",
        "https://www.example.com/dictionnaires/francais/vert",
        "https://www.larousse.fr//dictionnaires/francais/vert",
        "https://www.larousse.fr/encyclopedie/vert",
    ])
    def test_invalid(self, url):
        ok, reason = page.is_larousse_url(url)
        assert ok is False
        assert reason
