"""Tests for dictated text cleanup and language detection."""

import pytest

from menucost.voice.cleaning import (
    apply_food_name_corrections,
    clean_voice_input,
    detect_language,
    detect_phrase_repetition,
    is_filler,
    is_stutter,
    proper_capitalization,
    remove_stutters_and_repetitions,
)


class TestFillerDetection:
    """Tests for filler and stutter token detection."""

    @pytest.mark.parametrize("word", ["um", "uh", "ähm", "ummm", "ahhh", "mmm", "like", "le--lemon"])
    def test_fillers(self, word):
        assert is_filler(word) is True

    @pytest.mark.parametrize("word", ["lemon", "pad", "thai", "200g", "schnitzel"])
    def test_content_words(self, word):
        assert is_filler(word) is False

    def test_filler_with_punctuation(self):
        assert is_filler("um,") is True

    def test_prefix_stutter(self):
        """Test a cut-off word before the full word."""
        assert is_stutter("pa", "pad") is True
        assert is_stutter("p", "pad") is True
        assert is_stutter("pad", "pad") is False
        assert is_stutter("pad", "thai") is False

    def test_phrase_repetition(self):
        words = ["pad", "thai", "pad", "thai", "please"]
        assert detect_phrase_repetition(words, 0) == 2
        assert detect_phrase_repetition(words, 1) == 0


class TestStutterRemoval:
    """Tests for removing fillers, stutters and repetitions."""

    def test_fillers_and_repeated_word(self):
        """Test the classic hesitant dictation."""
        assert remove_stutters_and_repetitions("um um lemon lemon juice") == "Lemon juice"

    def test_prefix_stutter_and_repeated_phrase(self):
        result = remove_stutters_and_repetitions("pa pad thai pad thai is great")
        assert result == "Pad Thai is great"

    def test_unit_after_number_kept(self):
        """Test a one-letter unit is not mistaken for a cut-off word."""
        result = remove_stutters_and_repetitions("200 g garlic and 1 l lemon juice")
        assert result.lower() == "200 g garlic and 1 l lemon juice"

    def test_prefix_stutter_without_number(self):
        assert remove_stutters_and_repetitions("g garlic") == "Garlic"

    def test_dash_stutter_token_dropped(self):
        assert remove_stutters_and_repetitions("le--lemon lemon juice") == "Lemon juice"

    def test_filler_phrases(self):
        result = remove_stutters_and_repetitions("you know i think the avacado is good")
        assert result == "The Avocado is good"

    def test_german_fillers(self):
        assert remove_stutters_and_repetitions("äh das ist ein schnitzel") == "Das ist ein Schnitzel"

    def test_empty_input(self):
        assert remove_stutters_and_repetitions("") == ""
        assert remove_stutters_and_repetitions("   ") == ""
        assert remove_stutters_and_repetitions("um uh") == ""

    @pytest.mark.parametrize(
        "text",
        [
            "um um lemon lemon juice",
            "pa pad thai pad thai is great",
            "the the the tomato tomato salad",
            "so like we have uh schnitzel schnitzel mit mit kartoffeln",
            "200g tomatoes at 3 euro per kilo",
        ],
    )
    def test_idempotent(self, text):
        """Test cleaning already cleaned text changes nothing."""
        once = clean_voice_input(text).cleaned_text
        assert clean_voice_input(once).cleaned_text == once


class TestCorrections:
    """Tests for food-term corrections and capitalization."""

    def test_misheard_terms(self):
        assert apply_food_name_corrections("i like avacado and tomatos") == (
            "i like Avocado and Tomatoes"
        )

    def test_longest_entry_wins(self):
        assert apply_food_name_corrections("eggs benedict") == "Eggs Benedict"
        assert apply_food_name_corrections("pad dye") == "Pad Thai"

    def test_whole_words_only(self):
        """Test corrections do not fire inside other words."""
        assert apply_food_name_corrections("toil") == "toil"

    def test_sentence_capitalization(self):
        assert proper_capitalization("hello. world! ok") == "Hello. World! Ok"
        assert proper_capitalization("") == ""


class TestLanguageDetection:
    """Tests for German/English detection."""

    def test_english(self):
        assert detect_language("Lemon juice") == "en"
        assert detect_language("this is chicken with rice") == "en"

    def test_german(self):
        assert detect_language("Das ist ein Schnitzel mit Kartoffeln") == "de"

    def test_umlaut_bonus(self):
        assert detect_language("Spätzle") == "de"

    def test_unknown(self):
        assert detect_language("") == "unknown"
        assert detect_language("ab") == "unknown"
        assert detect_language("xyz qwerty") == "unknown"

    def test_clean_voice_input(self):
        result = clean_voice_input("um um lemon lemon juice")
        assert result.cleaned_text.count("Lemon juice") == 1
        assert result.detected_language == "en"
