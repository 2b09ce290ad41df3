"""English word-level matching: exact, inflected variant, spelling slip or wrong.

Grammar rules run before the spelling check and are never gated behind the
edit-distance threshold: "child"/"children" is far apart by edit distance but
is an inflection, and "cat"/"cats" is one edit apart but is still a plural
rather than a typo.
"""

import re

from .config import MatchingConfig
from models import MatchKind

VOWELS = set("aeiou")
CONSONANTS = set("bcdfghjklmnpqrstvwxz")

IRREGULAR_PLURALS: dict[str, str] = {
    "child": "children",
    "foot": "feet",
    "tooth": "teeth",
    "goose": "geese",
    "mouse": "mice",
    "louse": "lice",
    "man": "men",
    "woman": "women",
    "person": "people",
    "ox": "oxen",
    "die": "dice",
    "index": "indices",
    "vertex": "vertices",
    "matrix": "matrices",
    "appendix": "appendices",
    "analysis": "analyses",
    "basis": "bases",
    "crisis": "crises",
    "thesis": "theses",
    "criterion": "criteria",
    "phenomenon": "phenomena",
    "cactus": "cacti",
    "fungus": "fungi",
    "nucleus": "nuclei",
    "radius": "radii",
    "stimulus": "stimuli",
    "datum": "data",
    "medium": "media",
    "curriculum": "curricula",
}

# lemma -> irregular inflected forms (past, past participle, and any others)
IRREGULAR_VERBS: dict[str, tuple[str, ...]] = {
    "be": ("am", "is", "are", "was", "were", "been", "being"),
    "have": ("has", "had", "having"),
    "do": ("does", "did", "done"),
    "go": ("goes", "went", "gone"),
    "run": ("ran",),
    "eat": ("ate", "eaten"),
    "see": ("saw", "seen"),
    "take": ("took", "taken"),
    "give": ("gave", "given"),
    "write": ("wrote", "written"),
    "come": ("came",),
    "make": ("made",),
    "know": ("knew", "known"),
    "get": ("got", "gotten"),
    "say": ("said",),
    "think": ("thought",),
    "buy": ("bought",),
    "bring": ("brought",),
    "teach": ("taught",),
    "catch": ("caught",),
    "find": ("found",),
    "sit": ("sat",),
    "stand": ("stood",),
    "understand": ("understood",),
    "swim": ("swam", "swum"),
    "sing": ("sang", "sung"),
    "drink": ("drank", "drunk"),
    "begin": ("began", "begun"),
    "speak": ("spoke", "spoken"),
    "break": ("broke", "broken"),
    "choose": ("chose", "chosen"),
    "drive": ("drove", "driven"),
    "ride": ("rode", "ridden"),
    "rise": ("rose", "risen"),
    "fly": ("flew", "flown"),
    "grow": ("grew", "grown"),
    "throw": ("threw", "thrown"),
    "draw": ("drew", "drawn"),
    "blow": ("blew", "blown"),
    "fall": ("fell", "fallen"),
    "forget": ("forgot", "forgotten"),
    "wear": ("wore", "worn"),
    "tear": ("tore", "torn"),
    "steal": ("stole", "stolen"),
    "wake": ("woke", "woken"),
    "shake": ("shook", "shaken"),
    "hide": ("hid", "hidden"),
    "bite": ("bit", "bitten"),
    "freeze": ("froze", "frozen"),
    "leave": ("left",),
    "feel": ("felt",),
    "keep": ("kept",),
    "sleep": ("slept",),
    "meet": ("met",),
    "tell": ("told",),
    "sell": ("sold",),
    "hear": ("heard",),
    "pay": ("paid",),
    "lose": ("lost",),
    "send": ("sent",),
    "build": ("built",),
    "spend": ("spent",),
    "win": ("won",),
    "hold": ("held",),
    "lead": ("led",),
    "feed": ("fed",),
    "fight": ("fought",),
    "seek": ("sought",),
}

# inflected form -> lemmas it can come from
_IRREGULAR_LEMMAS: dict[str, set[str]] = {}
for _lemma, _plural in IRREGULAR_PLURALS.items():
    _IRREGULAR_LEMMAS.setdefault(_plural, set()).add(_lemma)
for _lemma, _forms in IRREGULAR_VERBS.items():
    for _form in _forms:
        _IRREGULAR_LEMMAS.setdefault(_form, set()).add(_lemma)

_WORD_SPLIT = re.compile(r"\s+")


def normalize_word(text: str, case_sensitive: bool = False) -> str:
    """Trim and collapse inner whitespace; lowercase unless case matters."""
    text = _WORD_SPLIT.sub(" ", (text or "").strip())
    return text if case_sensitive else text.lower()


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance (insert, delete, substitute), two-row DP."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def _ends_consonant_y(word: str) -> bool:
    return len(word) >= 2 and word[-1] == "y" and word[-2] in CONSONANTS


def _ends_cvc(word: str) -> bool:
    """Consonant-vowel-consonant ending, where the final consonant may double."""
    return (
        len(word) >= 3
        and word[-1] in CONSONANTS
        and word[-1] not in "wxy"
        and word[-2] in VOWELS
        and word[-3] in CONSONANTS
    )


def plural_forms(word: str) -> set[str]:
    """Regular and irregular plural forms of a singular noun."""
    forms = {word + "s"}
    if word.endswith(("s", "x", "z", "ch", "sh")):
        forms.add(word + "es")
    if _ends_consonant_y(word):
        forms.add(word[:-1] + "ies")
    if word.endswith("fe"):
        forms.add(word[:-2] + "ves")
    elif word.endswith("f"):
        forms.add(word[:-1] + "ves")
    if len(word) >= 2 and word[-1] == "o" and word[-2] in CONSONANTS:
        forms.add(word + "es")
    if word in IRREGULAR_PLURALS:
        forms.add(IRREGULAR_PLURALS[word])
    return forms


def verb_forms(word: str) -> set[str]:
    """Third person, progressive and past forms of a base verb."""
    forms: set[str] = set()

    # 3rd person singular
    if word.endswith(("s", "x", "z", "ch", "sh", "o")):
        forms.add(word + "es")
    elif _ends_consonant_y(word):
        forms.add(word[:-1] + "ies")
    else:
        forms.add(word + "s")

    # -ing
    if word.endswith("ie"):
        forms.add(word[:-2] + "ying")
    elif word.endswith("e") and not word.endswith(("ee", "ye", "oe")):
        forms.add(word[:-1] + "ing")
    else:
        forms.add(word + "ing")
    if _ends_cvc(word):
        forms.add(word + word[-1] + "ing")

    # -ed / -d
    if word.endswith("e"):
        forms.add(word + "d")
    elif _ends_consonant_y(word):
        forms.add(word[:-1] + "ied")
    else:
        forms.add(word + "ed")
    if _ends_cvc(word):
        forms.add(word + word[-1] + "ed")

    forms.update(IRREGULAR_VERBS.get(word, ()))
    return forms


def candidate_lemmas(word: str) -> set[str]:
    """Base forms a word might be inflected from (over-generates on purpose).

    Guesses without a vowel are dropped so that, e.g., "bring" is not
    explained as "br" + "ing".
    """
    guesses = {word}
    guesses.update(_IRREGULAR_LEMMAS.get(word, ()))

    if word.endswith("ies"):
        guesses.add(word[:-3] + "y")
    if word.endswith("ves"):
        guesses.update({word[:-3] + "f", word[:-3] + "fe"})
    if word.endswith("es"):
        guesses.add(word[:-2])
    if word.endswith("s"):
        guesses.add(word[:-1])
    if word.endswith("ying"):
        guesses.add(word[:-4] + "ie")
    if word.endswith("ing"):
        stem = word[:-3]
        guesses.update({stem, stem + "e"})
        if len(stem) >= 2 and stem[-1] == stem[-2]:
            guesses.add(stem[:-1])
    if word.endswith("ied"):
        guesses.add(word[:-3] + "y")
    if word.endswith("ed"):
        stem = word[:-2]
        guesses.update({stem, word[:-1]})
        if len(stem) >= 2 and stem[-1] == stem[-2]:
            guesses.add(stem[:-1])

    return {g for g in guesses if g and set(g) & (VOWELS | {"y"})}


def inflections(lemma: str) -> set[str]:
    return {lemma} | plural_forms(lemma) | verb_forms(lemma)


def is_grammatical_variation(expected: str, actual: str) -> bool:
    """True when both words are forms of a common lemma under some rule."""
    if expected == actual:
        return False
    for lemma in candidate_lemmas(expected) | candidate_lemmas(actual):
        forms = inflections(lemma)
        if expected in forms and actual in forms:
            return True
    return False


class MorphologyMatcher:
    """Classifies a learner's word against the expected word."""

    def __init__(self, config: MatchingConfig | None = None):
        self.config = config or MatchingConfig()

    def classify(
        self, expected: str, actual: str, case_sensitive: bool = False
    ) -> MatchKind:
        expected_norm = normalize_word(expected, case_sensitive)
        actual_norm = normalize_word(actual, case_sensitive)

        if expected_norm == actual_norm:
            return MatchKind.EXACT
        if not actual_norm:
            return MatchKind.WRONG

        # Differs only by capitalization on a case-sensitive blank
        if case_sensitive and expected_norm.lower() == actual_norm.lower():
            return MatchKind.SPELLING

        expected_cmp = expected_norm.lower()
        actual_cmp = actual_norm.lower()
        if self._is_variation(expected_cmp, actual_cmp):
            return MatchKind.GRAMMATICAL_VARIATION
        if self.is_spelling_slip(expected_cmp, actual_cmp):
            return MatchKind.SPELLING
        return MatchKind.WRONG

    def is_spelling_slip(self, expected: str, actual: str) -> bool:
        distance = levenshtein_distance(expected, actual)
        return 0 < distance <= self.config.max_distance_for(expected)

    def _is_variation(self, expected: str, actual: str) -> bool:
        if is_grammatical_variation(expected, actual):
            return True

        # Phrases: same length, and every differing word is an inflection
        expected_words = expected.split(" ")
        actual_words = actual.split(" ")
        if len(expected_words) < 2 or len(expected_words) != len(actual_words):
            return False
        differing = [
            (e, a) for e, a in zip(expected_words, actual_words) if e != a
        ]
        return bool(differing) and all(
            is_grammatical_variation(e, a) for e, a in differing
        )
