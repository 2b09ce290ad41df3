"""Answer comparison across question variants.

Each variant gets its own comparison branch that receives an answer already
narrowed to the shape it expects (string, list of words, or mapping). Any
question the comparator does not recognize is compared as a whole string.
"""

import logging
from collections import Counter
from typing import Any

from models import (
    Answer,
    Classification,
    ComparisonResult,
    DragAndDropQuestion,
    EssayQuestion,
    FillInBlankQuestion,
    MatchKind,
    MultipleChoiceQuestion,
    Question,
    SentenceBuilderQuestion,
)

from .base import as_list, as_mapping, as_text, normalize_text, percent
from .config import MatchingConfig
from .morphology import MorphologyMatcher

logger = logging.getLogger(__name__)

# Best outcome first
_MATCH_RANK = {
    MatchKind.EXACT: 0,
    MatchKind.GRAMMATICAL_VARIATION: 1,
    MatchKind.SPELLING: 2,
    MatchKind.WRONG: 3,
}


class AnswerComparator:
    """Classifies a learner's answer as correct, partial or incorrect."""

    def __init__(
        self,
        matcher: MorphologyMatcher | None = None,
        config: MatchingConfig | None = None,
    ):
        self.config = config or (matcher.config if matcher else MatchingConfig())
        self.matcher = matcher or MorphologyMatcher(self.config)

    def compare(
        self,
        question: Question,
        user_answer: Answer,
        correct_answer: Answer = None,
    ) -> ComparisonResult:
        """Compare a learner answer against the expected answer.

        Args:
            question: The question being answered.
            user_answer: The learner's raw answer, in any shape.
            correct_answer: Expected answer; defaults to the question's own.

        Returns:
            Classification, per-part details, credit score and error kind.
        """
        if correct_answer is None:
            correct_answer = question.canonical_answer()

        if isinstance(question, MultipleChoiceQuestion):
            return self._compare_multiple_choice(
                as_text(user_answer), as_text(correct_answer)
            )
        elif isinstance(question, FillInBlankQuestion):
            return self._compare_fill_in_blank(
                question, _as_blanks(user_answer), _as_blanks(correct_answer)
            )
        elif isinstance(question, SentenceBuilderQuestion):
            return self._compare_sentence_builder(
                as_list(user_answer), as_list(correct_answer)
            )
        elif isinstance(question, DragAndDropQuestion):
            return self._compare_drag_and_drop(
                as_mapping(user_answer), as_mapping(correct_answer)
            )
        elif isinstance(question, EssayQuestion):
            return self._compare_essay(question, as_text(user_answer))

        logger.debug(
            "Unrecognized question type %r for %s, using exact comparison",
            question.type,
            question.id,
        )
        return self._compare_exact(user_answer, correct_answer)

    # ------------------------------------------------------------------
    # Variant branches
    # ------------------------------------------------------------------

    def _compare_multiple_choice(self, user: str, correct: str) -> ComparisonResult:
        if normalize_text(user) and normalize_text(user) == normalize_text(correct):
            return _correct()

        detail = (
            f"Incorrect choice: '{user.strip()}'"
            if user.strip()
            else "Incorrect: no option selected"
        )
        return ComparisonResult(
            classification=Classification.INCORRECT,
            details=[detail],
            score=0.0,
            error_type="incorrect",
        )

    def _compare_fill_in_blank(
        self,
        question: FillInBlankQuestion,
        user: list[str],
        correct: list[str],
    ) -> ComparisonResult:
        blanks = question.ordered_blanks()
        total = max(len(blanks), len(correct))
        if total == 0:
            return self._compare_exact(user, correct)

        credit = 0.0
        exact_count = 0
        details: list[str] = []
        kinds: set[MatchKind] = set()

        for i in range(total):
            acceptable: list[str] = []
            if i < len(correct) and correct[i].strip():
                acceptable.append(correct[i])
            case_sensitive = False
            position = i + 1
            if i < len(blanks):
                blank = blanks[i]
                position = blank.position
                case_sensitive = blank.case_sensitive
                acceptable.extend(
                    a for a in blank.acceptable_answers if a not in acceptable
                )
            actual = user[i] if i < len(user) else ""

            kind, reference = self._best_match(acceptable, actual, case_sensitive)
            kinds.add(kind)

            if kind == MatchKind.EXACT:
                exact_count += 1
                credit += 1.0
            elif kind == MatchKind.GRAMMATICAL_VARIATION:
                credit += self.config.grammar_credit
                details.append(
                    f"Blank {position}: Grammatical variation of '{reference}' "
                    f"({percent(self.config.grammar_credit)}% credit)"
                )
            elif kind == MatchKind.SPELLING:
                credit += self.config.spelling_credit
                details.append(
                    f"Blank {position}: Spelling error, expected '{reference}' "
                    f"({percent(self.config.spelling_credit)}% credit)"
                )
            elif actual.strip():
                details.append(f"Blank {position}: Incorrect, expected '{reference}'")
            else:
                details.append(f"Blank {position}: Incorrect, left empty")

        if exact_count == total:
            return _correct(total_parts=total)

        if MatchKind.WRONG in kinds:
            error_type = "incorrect"
        elif MatchKind.GRAMMATICAL_VARIATION in kinds:
            error_type = "grammar"
        else:
            error_type = "spelling"

        classification = (
            Classification.INCORRECT if credit == 0 else Classification.PARTIAL
        )
        return ComparisonResult(
            classification=classification,
            details=details,
            score=credit / total,
            error_type=error_type,
            total_parts=total,
        )

    def _compare_sentence_builder(
        self, user: list[str], correct: list[str]
    ) -> ComparisonResult:
        user_words = [normalize_text(w) for w in user]
        correct_words = [normalize_text(w) for w in correct]
        total = len(correct_words)

        if not any(user_words):
            return ComparisonResult(
                classification=Classification.INCORRECT,
                details=["Incorrect: no words submitted"],
                error_type="missing_content",
                total_parts=total,
            )
        if user_words == correct_words:
            return _correct(total_parts=total)

        user_counts = Counter(user_words)
        correct_counts = Counter(correct_words)
        if user_counts == correct_counts:
            misplaced = sum(1 for u, c in zip(user_words, correct_words) if u != c)
            return ComparisonResult(
                classification=Classification.PARTIAL,
                details=[f"Word order: {misplaced} of {total} words out of place"],
                score=(total - misplaced) / total,
                error_type="word_order",
                total_parts=total,
            )

        details: list[str] = []
        extra = user_counts - correct_counts
        missing = correct_counts - user_counts
        if extra:
            details.append(
                "Incorrect words: " + ", ".join(f"'{w}'" for w in extra.elements())
            )
        if missing:
            details.append(
                "Missing words: " + ", ".join(f"'{w}'" for w in missing.elements())
            )
        return ComparisonResult(
            classification=Classification.INCORRECT,
            details=details,
            error_type="incorrect",
            total_parts=total,
        )

    def _compare_drag_and_drop(
        self, user: dict[str, str], correct: dict[str, str]
    ) -> ComparisonResult:
        total = len(correct)
        if total == 0:
            return self._compare_exact(user, correct)

        placed_correctly = 0
        details: list[str] = []
        for item, category in correct.items():
            placed = user.get(item, "")
            if normalize_text(placed) == normalize_text(category):
                placed_correctly += 1
            else:
                details.append(
                    f"Incorrect placement: '{item}' belongs in '{category}', "
                    f"not '{placed or 'nowhere'}'"
                )

        if placed_correctly == total:
            return _correct(total_parts=total)
        classification = (
            Classification.INCORRECT
            if placed_correctly == 0
            else Classification.PARTIAL
        )
        return ComparisonResult(
            classification=classification,
            details=details,
            score=placed_correctly / total,
            error_type="misplacement",
            total_parts=total,
        )

    def _compare_essay(self, question: EssayQuestion, text: str) -> ComparisonResult:
        normalized = normalize_text(text)
        if not normalized:
            return ComparisonResult(
                classification=Classification.INCORRECT,
                details=["Incorrect: no answer given"],
                error_type="missing_content",
            )

        # Structural checks only; grading prose belongs to an external grader
        details: list[str] = []
        for key_point in question.key_points:
            if normalize_text(key_point) not in normalized:
                details.append(f"Missing key point: '{key_point}'")
        if question.min_words:
            word_count = len(normalized.split())
            if word_count < question.min_words:
                details.append(
                    f"Too short: {word_count} of {question.min_words} words"
                )

        total = len(question.key_points) + (1 if question.min_words else 0)
        if not details:
            return _correct(total_parts=max(total, 1))

        satisfied = total - len(details)
        classification = (
            Classification.INCORRECT if satisfied == 0 else Classification.PARTIAL
        )
        return ComparisonResult(
            classification=classification,
            details=details,
            score=satisfied / total,
            error_type="missing_content",
            total_parts=total,
        )

    def _compare_exact(self, user: Any, correct: Any) -> ComparisonResult:
        user_key = _answer_key(user)
        if user_key and user_key == _answer_key(correct):
            return _correct()
        return ComparisonResult(
            classification=Classification.INCORRECT,
            details=["Incorrect: answer does not match"],
            error_type="incorrect",
        )

    # ------------------------------------------------------------------

    def _best_match(
        self, acceptable: list[str], actual: str, case_sensitive: bool
    ) -> tuple[MatchKind, str]:
        """Best classification of actual against any acceptable answer."""
        if not acceptable:
            return MatchKind.WRONG, ""

        best_kind = MatchKind.WRONG
        best_reference = acceptable[0]
        for expected in acceptable:
            kind = self.matcher.classify(expected, actual, case_sensitive)
            if _MATCH_RANK[kind] < _MATCH_RANK[best_kind]:
                best_kind, best_reference = kind, expected
                if kind == MatchKind.EXACT:
                    break
        return best_kind, best_reference


def _correct(total_parts: int = 1) -> ComparisonResult:
    return ComparisonResult(
        classification=Classification.CORRECT,
        details=[],
        score=1.0,
        total_parts=total_parts,
    )


def _as_blanks(answer: Answer) -> list[str]:
    # A lone string is a single blank, not a list of words
    if isinstance(answer, str):
        return [answer]
    return as_list(answer)


def _answer_key(answer: Any) -> str:
    """Shape-independent normalized form used by exact comparison."""
    if isinstance(answer, dict):
        mapping = as_mapping(answer)
        return ";".join(
            f"{normalize_text(k)}={normalize_text(v)}" for k, v in sorted(mapping.items())
        )
    return normalize_text(as_text(answer))
