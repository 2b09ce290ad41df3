"""Turns a comparison outcome into learner-facing feedback.

Composition is a pure function of its inputs: the same classification,
details, context and options always produce an equal Feedback value.
"""

import re

from models import Classification, Feedback, FeedbackContext, HintStyle, Tone

from .base import as_list, as_mapping, percent
from .comparator import AnswerComparator
from .config import FeedbackOptions

# Indexed by attempt number (1-based, clamped to the last entry)
INCORRECT_MESSAGES = [
    "Not quite. Take another look at the question.",
    "Still not right. Consider using a hint.",
    "Keep trying! You're learning.",
]

PARTIAL_FOLLOW_UPS = [
    "Take another look at the parts marked below.",
    "Consider using a hint for the remaining parts.",
    "Keep trying, you're close.",
]

ENCOURAGEMENTS: dict[Tone, list[str]] = {
    Tone.ENCOURAGING: [
        "Great effort! You're getting closer.",
        "Keep up the effort! Learning takes practice.",
        "Your effort is paying off. Each attempt helps you learn.",
    ],
    Tone.NEUTRAL: [
        "Thanks for the effort. Give it another try.",
        "Steady effort builds skill.",
        "Every bit of effort counts toward mastery.",
    ],
    Tone.STRICT: [
        "Effort noted. Review the material and try again.",
        "Apply careful effort to each part of the answer.",
        "Consistent effort is required to master this.",
    ],
}

RELATED_CONCEPTS: dict[str, list[str]] = {
    "spelling": ["Letter patterns", "Common misspellings"],
    "grammar": ["Plural forms", "Verb conjugation", "Subject-verb agreement"],
    "word_order": ["Sentence structure", "Word order rules"],
    "misplacement": ["Word categories", "Parts of speech"],
    "incorrect": ["Word meanings", "Context clues"],
    "missing_content": ["Key points", "Paragraph structure"],
}

# Detail substrings that identify the kind of error, most specific first
_DETAIL_MARKERS = [
    ("Grammatical variation", "grammar"),
    ("Spelling error", "spelling"),
    ("Word order", "word_order"),
    ("Incorrect placement", "misplacement"),
    ("Missing key point", "missing_content"),
    ("Too short", "missing_content"),
    ("Incorrect", "incorrect"),
]

_CREDIT_PATTERN = re.compile(r"\((\d+)% credit\)")

_SEVERITY_ORDER = [
    "incorrect",
    "misplacement",
    "word_order",
    "missing_content",
    "grammar",
    "spelling",
]


def _pick(messages: list[str], attempt_number: int) -> str:
    return messages[min(attempt_number, len(messages)) - 1]


def infer_error_type(details: list[str]) -> str | None:
    """Most severe error kind named in a list of detail strings."""
    found = set()
    for detail in details:
        for marker, error_type in _DETAIL_MARKERS:
            if marker in detail:
                found.add(error_type)
                break
    for error_type in _SEVERITY_ORDER:
        if error_type in found:
            return error_type
    return None


def _detail_credit(detail: str) -> float:
    """Credit named in a detail such as "... (70% credit)", else 0."""
    match = _CREDIT_PATTERN.search(detail)
    return int(match.group(1)) / 100 if match else 0.0


def _is_minor(error_type: str | None, score: float) -> bool:
    return error_type == "spelling" or score > 0.5


def _count_parts(context: FeedbackContext) -> int:
    expected = context.expected_answer()
    if isinstance(expected, dict):
        return max(len(as_mapping(expected)), 1)
    if isinstance(expected, list):
        return max(len(as_list(expected)), 1)
    return 1


class FeedbackComposer:
    """Builds the title, message, encouragement and next steps."""

    def compose(
        self,
        classification: Classification,
        details: list[str],
        context: FeedbackContext,
        options: FeedbackOptions | None = None,
        *,
        score: float | None = None,
        error_type: str | None = None,
    ) -> Feedback:
        """Compose feedback for one evaluated answer.

        Args:
            classification: Outcome from the comparator.
            details: Per-part discrepancy strings, passed through verbatim.
            context: The evaluation context (attempt number, hints used, ...).
            options: Wording and adaptivity options.
            score: Credit fraction. Derived from details when omitted.
            error_type: Kind of error. Inferred from details when omitted.

        Returns:
            An immutable Feedback value.
        """
        options = options or FeedbackOptions()
        if error_type is None:
            error_type = infer_error_type(details)
        if score is None:
            score = self._derive_score(classification, details, context)

        title = self._title(classification, context.hints_used)
        message = self._message(classification, context.attempt_number, score, options)
        related_concepts: list[str] = []

        if options.enable_adaptive and classification != Classification.CORRECT:
            related_concepts = list(RELATED_CONCEPTS.get(error_type or "", []))
            profile = context.user_profile
            if profile is not None:
                visual = profile.preferred_hint_style == HintStyle.VISUAL
                if visual and details and not _is_minor(error_type, score):
                    message += " Check the visual guide below."
                if profile.has_recurring_mistake(error_type):
                    message += " This relates to a pattern we've seen before."

        encouragement = None
        if options.enable_encouragement:
            encouragement = _pick(
                ENCOURAGEMENTS[options.tone], context.attempt_number
            )

        return Feedback(
            classification=classification,
            title=title,
            message=message,
            details=list(details),
            encouragement=encouragement,
            next_steps=self._next_steps(classification, error_type, context),
            score=score,
            related_concepts=related_concepts,
        )

    def _title(self, classification: Classification, hints_used: int) -> str:
        if classification == Classification.CORRECT:
            return "Perfect!" if hints_used == 0 else "Correct!"
        elif classification == Classification.PARTIAL:
            return "Almost there!"
        else:
            return "Not quite right"

    def _message(
        self,
        classification: Classification,
        attempt_number: int,
        score: float,
        options: FeedbackOptions,
    ) -> str:
        if classification == Classification.CORRECT:
            if options.tone == Tone.STRICT:
                return "Well done. The answer is correct."
            return "Well done! You got it right."
        elif classification == Classification.PARTIAL:
            follow_up = _pick(PARTIAL_FOLLOW_UPS, attempt_number)
            return f"You got {percent(score)}% correct. {follow_up}"
        else:
            return _pick(INCORRECT_MESSAGES, attempt_number)

    def _next_steps(
        self,
        classification: Classification,
        error_type: str | None,
        context: FeedbackContext,
    ) -> str:
        if classification == Classification.CORRECT:
            return "Move on to the next question."
        if context.attempt_number >= 3 and context.hints_used == 0:
            return "Consider using a hint for guidance."
        if error_type == "spelling":
            return "Check your spelling carefully."
        if error_type == "grammar":
            return "Review the grammatical rules for this type of question."
        if error_type == "word_order":
            return "Start from the subject and verb, then place the remaining words."
        if context.question.explanation:
            return "Review the explanation, then try again."
        return "Review your answer and try again."

    def _derive_score(
        self,
        classification: Classification,
        details: list[str],
        context: FeedbackContext,
    ) -> float:
        if classification == Classification.CORRECT:
            return 1.0
        if classification == Classification.INCORRECT:
            return 0.0
        total = max(_count_parts(context), len(details))
        lost = sum(1.0 - _detail_credit(detail) for detail in details)
        if lost >= total:
            # Partial means something was right; never report 0%
            return 1 / (total + 1)
        return (total - lost) / total


def generate_feedback(
    context: FeedbackContext,
    options: FeedbackOptions | None = None,
    comparator: AnswerComparator | None = None,
) -> Feedback:
    """Compare the learner's answer and compose feedback for it."""
    comparator = comparator or AnswerComparator()
    result = comparator.compare(
        context.question, context.user_answer, context.expected_answer()
    )
    return FeedbackComposer().compose(
        result.classification,
        result.details,
        context,
        options,
        score=result.score,
        error_type=result.error_type,
    )
