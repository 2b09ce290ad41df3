"""Progressive hint delivery.

A HintSequence moves from unstarted (current_index == -1) through revealing
to exhausted (current_index == max_hints - 1). Once exhausted, get_next_hint
returns None and leaves the sequence untouched.
"""

import logging

from models import (
    DragAndDropQuestion,
    EssayQuestion,
    FeedbackContext,
    FillInBlankQuestion,
    Hint,
    HintCategory,
    HintSequence,
    HintSource,
    MultipleChoiceQuestion,
    Question,
    SentenceBuilderQuestion,
)

from .config import FeedbackOptions

logger = logging.getLogger(__name__)

# (content, category, reveal percentage) per question variant
MULTIPLE_CHOICE_HINTS = [
    (
        "Consider eliminating obviously incorrect options first.",
        HintCategory.STRATEGY,
        20,
    ),
    (
        "Check which option agrees grammatically with the rest of the sentence.",
        HintCategory.GRAMMAR,
        50,
    ),
]

FILL_IN_BLANK_HINTS = [
    ("Look at the context around each blank for clues.", HintCategory.STRATEGY, 20),
    (
        "Check the grammatical form needed (verb tense, singular/plural, etc.).",
        HintCategory.GRAMMAR,
        40,
    ),
]

SENTENCE_BUILDER_HINTS = [
    ("Start by identifying the subject and main verb.", HintCategory.STRATEGY, 25),
    (
        "Think about the typical word order in English sentences: "
        "subject, verb, object.",
        HintCategory.GRAMMAR,
        50,
    ),
]

DRAG_AND_DROP_HINTS = [
    ("Group similar items together first.", HintCategory.STRATEGY, 20),
    (
        "Place the items you are sure about, then decide on the rest.",
        HintCategory.STRATEGY,
        45,
    ),
]

ESSAY_HINTS = [
    ("Outline your main points before you start writing.", HintCategory.STRATEGY, 20),
    (
        "Check that each subject agrees with its verb.",
        HintCategory.GRAMMAR,
        40,
    ),
]

FALLBACK_HINTS = [
    ("Read the question again carefully.", HintCategory.STRATEGY, 30),
]


def provided_reveal_percentage(index: int) -> int:
    """Author hints sit at the low end of the range: 10, 30, 50, ..."""
    return min(10 + 20 * index, 90)


def type_specific_hints(question: Question) -> list[Hint]:
    if isinstance(question, MultipleChoiceQuestion):
        templates = MULTIPLE_CHOICE_HINTS
    elif isinstance(question, FillInBlankQuestion):
        templates = FILL_IN_BLANK_HINTS
    elif isinstance(question, SentenceBuilderQuestion):
        templates = SENTENCE_BUILDER_HINTS
    elif isinstance(question, DragAndDropQuestion):
        templates = DRAG_AND_DROP_HINTS
    elif isinstance(question, EssayQuestion):
        templates = ESSAY_HINTS
    else:
        templates = FALLBACK_HINTS

    return [
        Hint(
            content=content,
            category=category,
            reveal_percentage=reveal,
            source=HintSource.GENERATED,
            level=level,
        )
        for level, (content, category, reveal) in enumerate(templates, start=1)
    ]


def hint_priority(
    hint: Hint, position: int, weak_categories: set[str]
) -> tuple[bool, int, int]:
    """Sort key for adaptive selection; larger is preferred.

    Weakness matches win, then lower reveal percentage, then earlier position.
    """
    return (
        hint.category.value in weak_categories,
        -hint.reveal_percentage,
        -position,
    )


class HintSequencer:
    """Builds hint sequences and reveals hints one at a time."""

    def __init__(self, options: FeedbackOptions | None = None):
        self.options = options or FeedbackOptions()

    def generate_hint_sequence(
        self, question: Question, options: FeedbackOptions | None = None
    ) -> HintSequence:
        options = options or self.options

        hints = [
            Hint(
                content=text,
                category=HintCategory.PROVIDED,
                reveal_percentage=provided_reveal_percentage(i),
                source=HintSource.AUTHOR,
                level=i,
            )
            for i, text in enumerate(question.hints or [])
            if text and text.strip()
        ]
        hints.extend(type_specific_hints(question))

        # sorted() is stable, so ties keep authored hints ahead of generated ones
        hints = sorted(hints, key=lambda h: h.reveal_percentage)

        sequence = HintSequence(
            hints=hints,
            max_hints=min(len(hints), options.max_hints),
            adaptive_mode=options.enable_adaptive,
        )
        logger.debug(
            "Generated %d hints for question %s (max %d)",
            len(hints),
            question.id,
            sequence.max_hints,
        )
        return sequence

    def get_next_hint(
        self, sequence: HintSequence, context: FeedbackContext | None = None
    ) -> Hint | None:
        """Reveal the next hint, or return None once the sequence is exhausted.

        With adaptive mode on and a learner profile in the context, an
        unrevealed hint in one of the learner's weak categories is preferred,
        even ahead of hints with a lower reveal percentage; otherwise hints
        come out in sequence order.
        """
        if sequence.is_exhausted:
            logger.debug("Hint sequence exhausted at index %d", sequence.current_index)
            return None

        unrevealed = [
            i for i in range(len(sequence.hints)) if i not in sequence.revealed
        ]
        position = unrevealed[0]

        profile = context.user_profile if context is not None else None
        if sequence.adaptive_mode and profile is not None:
            weak = profile.weak_categories()
            best = max(
                unrevealed,
                key=lambda i: hint_priority(sequence.hints[i], i, weak),
            )
            if sequence.hints[best].category.value in weak:
                position = best

        sequence.current_index += 1
        sequence.revealed.append(position)
        return sequence.hints[position]


_default_sequencer = HintSequencer()


def generate_hint_sequence(
    question: Question, options: FeedbackOptions | None = None
) -> HintSequence:
    return _default_sequencer.generate_hint_sequence(question, options)


def get_next_hint(
    sequence: HintSequence, context: FeedbackContext | None = None
) -> Hint | None:
    return _default_sequencer.get_next_hint(sequence, context)
