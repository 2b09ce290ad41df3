"""Unit tests for word-level morphology matching."""

import pytest
from pydantic import ValidationError

from exercises.config import MatchingConfig
from exercises.morphology import (
    MorphologyMatcher,
    candidate_lemmas,
    is_grammatical_variation,
    levenshtein_distance,
    plural_forms,
    verb_forms,
)
from models import MatchKind

PLURAL_PAIRS = [
    ("cat", "cats"),
    ("box", "boxes"),
    ("city", "cities"),
    ("leaf", "leaves"),
    ("hero", "heroes"),
    ("child", "children"),
    ("foot", "feet"),
    ("mouse", "mice"),
    ("person", "people"),
    ("index", "indices"),
    ("vertex", "vertices"),
    ("matrix", "matrices"),
]


@pytest.fixture
def matcher() -> MorphologyMatcher:
    return MorphologyMatcher()


class TestLevenshteinDistance:
    """Tests for the edit distance helper."""

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("kitten", "sitting", 3),
            ("flaw", "lawn", 2),
            ("", "abc", 3),
            ("abc", "", 3),
            ("same", "same", 0),
            ("the", "thw", 1),
        ],
    )
    def test_known_distances(self, a, b, expected):
        """Distances match the textbook values."""
        assert levenshtein_distance(a, b) == expected

    def test_symmetric(self):
        """Distance does not depend on argument order."""
        assert levenshtein_distance("receive", "recieve") == levenshtein_distance(
            "recieve", "receive"
        )


class TestInflectionRules:
    """Tests for the plural and verb form generators."""

    def test_regular_plural_suffixes(self):
        """Plural rules cover -s, -es, -ies, -ves and -oes."""
        assert "cats" in plural_forms("cat")
        assert "dishes" in plural_forms("dish")
        assert "cities" in plural_forms("city")
        assert "knives" in plural_forms("knife")
        assert "potatoes" in plural_forms("potato")

    def test_verb_suffixes(self):
        """Verb rules cover third person, -ing and past forms."""
        forms = verb_forms("stop")
        assert {"stops", "stopping", "stopped"} <= forms

        assert "making" in verb_forms("make")
        assert "studied" in verb_forms("study")
        assert "lying" in verb_forms("lie")

    def test_irregular_verbs_included(self):
        """Irregular past forms come from the lookup table."""
        assert {"went", "gone", "goes"} <= verb_forms("go")
        assert "ran" in verb_forms("run")

    def test_candidate_lemmas_strip_suffixes(self):
        """Inflected words map back to plausible base forms."""
        assert "run" in candidate_lemmas("running")
        assert "city" in candidate_lemmas("cities")
        assert "leaf" in candidate_lemmas("leaves")
        assert "child" in candidate_lemmas("children")

    def test_candidate_lemmas_need_a_vowel(self):
        """Stems without any vowel are not offered as lemmas."""
        assert "br" not in candidate_lemmas("bring")


class TestMorphologyMatcher:
    """Tests for MorphologyMatcher.classify."""

    def test_exact_match_ignores_case_and_whitespace(self, matcher):
        """Trimmed, case-insensitive equality is exact."""
        assert matcher.classify("Paris", "  paris ") == MatchKind.EXACT

    @pytest.mark.parametrize("singular,plural", PLURAL_PAIRS)
    def test_plural_is_grammatical_variation(self, matcher, singular, plural):
        """A plural submitted for a singular is a grammatical variation."""
        assert matcher.classify(singular, plural) == MatchKind.GRAMMATICAL_VARIATION

    @pytest.mark.parametrize("singular,plural", PLURAL_PAIRS)
    def test_singular_for_plural_is_grammatical_variation(
        self, matcher, singular, plural
    ):
        """Rules apply in both directions."""
        assert matcher.classify(plural, singular) == MatchKind.GRAMMATICAL_VARIATION

    @pytest.mark.parametrize("actual", ["running", "runs", "ran"])
    def test_verb_forms_are_grammatical_variations(self, matcher, actual):
        """Inflected verb forms match their base verb."""
        assert matcher.classify("run", actual) == MatchKind.GRAMMATICAL_VARIATION

    def test_grammar_takes_priority_over_spelling(self, matcher):
        """cat/cats is one edit apart but still classified as grammar."""
        assert levenshtein_distance("cat", "cats") == 1
        assert matcher.classify("cat", "cats") == MatchKind.GRAMMATICAL_VARIATION

    def test_unrelated_words_are_wrong(self, matcher):
        """cat/dog is neither an inflection nor a typo."""
        assert matcher.classify("cat", "dog") == MatchKind.WRONG

    def test_short_word_spelling_slip(self, matcher):
        """One edit on a short word is a spelling error."""
        assert matcher.classify("Paris", "Pares") == MatchKind.SPELLING
        assert matcher.classify("the", "thw") == MatchKind.SPELLING

    def test_two_edits_on_short_word_is_wrong(self, matcher):
        """Short words only tolerate a single edit."""
        assert matcher.classify("the", "hte") == MatchKind.WRONG

    def test_long_word_allows_two_edits(self, matcher):
        """Words longer than five characters tolerate two edits."""
        assert matcher.classify("France", "French") == MatchKind.SPELLING
        assert matcher.classify("receive", "recieve") == MatchKind.SPELLING

    def test_empty_answer_is_wrong(self, matcher):
        """An empty submission never matches."""
        assert matcher.classify("cat", "") == MatchKind.WRONG
        assert matcher.classify("cat", "   ") == MatchKind.WRONG

    def test_case_sensitive_blank(self, matcher):
        """On a case-sensitive blank a capitalization slip is a spelling error."""
        assert matcher.classify("Paris", "paris", case_sensitive=True) == (
            MatchKind.SPELLING
        )
        assert matcher.classify("Paris", "Paris", case_sensitive=True) == (
            MatchKind.EXACT
        )

    def test_phrase_with_inflected_word(self, matcher):
        """Phrases match when every differing word is an inflection."""
        assert matcher.classify("he runs fast", "he ran fast") == (
            MatchKind.GRAMMATICAL_VARIATION
        )

    def test_is_grammatical_variation_rejects_identical_words(self):
        """Identical words are exact, not a variation."""
        assert not is_grammatical_variation("cat", "cat")


class TestMatchingConfig:
    """Tests for tuning the matcher with MatchingConfig."""

    def test_stricter_threshold_disables_spelling(self):
        """With zero tolerated edits a typo is simply wrong."""
        matcher = MorphologyMatcher(
            MatchingConfig(short_word_max_distance=0, long_word_max_distance=0)
        )
        assert matcher.classify("the", "thw") == MatchKind.WRONG
        assert matcher.classify("cat", "cats") == MatchKind.GRAMMATICAL_VARIATION

    def test_max_distance_for_word_length(self):
        """The long threshold starts above long_word_length characters."""
        config = MatchingConfig()
        assert config.max_distance_for("Paris") == 1
        assert config.max_distance_for("France") == 2

    def test_long_threshold_must_not_be_smaller(self):
        """A long-word threshold below the short one is rejected."""
        with pytest.raises(ValidationError):
            MatchingConfig(short_word_max_distance=2, long_word_max_distance=1)
