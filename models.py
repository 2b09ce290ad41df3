from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# A learner's (or canonical) answer. The shape depends on the question variant:
# a single string, an ordered list of strings, or an item -> category mapping.
Answer = Union[str, list[str], dict[str, str], None]


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    FILL_IN_BLANK = "fill_in_blank"
    DRAG_AND_DROP = "drag_and_drop"
    SENTENCE_BUILDER = "sentence_builder"
    ESSAY = "essay"


class Classification(str, Enum):
    CORRECT = "correct"
    PARTIAL = "partial"
    INCORRECT = "incorrect"


class MatchKind(str, Enum):
    """Outcome of comparing a single expected word against a learner's word."""

    EXACT = "exact"
    GRAMMATICAL_VARIATION = "grammatical_variation"
    SPELLING = "spelling"
    WRONG = "wrong"


class HintCategory(str, Enum):
    PROVIDED = "provided"
    STRATEGY = "strategy"
    GRAMMAR = "grammar"


class HintSource(str, Enum):
    AUTHOR = "author"
    GENERATED = "generated"


class Tone(str, Enum):
    ENCOURAGING = "encouraging"
    NEUTRAL = "neutral"
    STRICT = "strict"


class HintStyle(str, Enum):
    DETAILED = "detailed"
    MINIMAL = "minimal"
    VISUAL = "visual"


# ============================================================================
# Question Models
# ============================================================================


class Question(BaseModel):
    """Base question model.

    Instances of this class itself (rather than a subclass) represent
    question variants the engine does not recognize.
    """

    id: str
    type: str
    text: str = ""
    hints: list[str] = Field(default_factory=list)  # Author-written, in order
    explanation: str | None = None
    points: int = Field(default=1, ge=0)
    correct_answer: Answer = None

    def canonical_answer(self) -> Answer:
        """Return the expected answer in this variant's shape."""
        return self.correct_answer


class MultipleChoiceQuestion(Question):
    type: Literal["multiple_choice"] = "multiple_choice"
    options: list[str]
    correct_answer: str

    def canonical_answer(self) -> str:
        return self.correct_answer


class Blank(BaseModel):
    """A single blank in a fill-in-blank template."""

    id: str
    position: int = Field(ge=1)  # 1-based, as shown to the learner
    acceptable_answers: list[str]
    case_sensitive: bool = False


class FillInBlankQuestion(Question):
    type: Literal["fill_in_blank"] = "fill_in_blank"
    template: str = ""  # Text with {blank} placeholders
    blanks: list[Blank] = Field(default_factory=list)
    correct_answer: list[str] | None = None

    def canonical_answer(self) -> list[str]:
        if self.correct_answer is not None:
            return self.correct_answer
        return [
            blank.acceptable_answers[0] if blank.acceptable_answers else ""
            for blank in sorted(self.blanks, key=lambda b: b.position)
        ]

    def ordered_blanks(self) -> list[Blank]:
        return sorted(self.blanks, key=lambda b: b.position)


class DragAndDropQuestion(Question):
    type: Literal["drag_and_drop"] = "drag_and_drop"
    items: list[str] = Field(default_factory=list)
    targets: list[str] = Field(default_factory=list)
    correct_mapping: dict[str, str]

    def canonical_answer(self) -> dict[str, str]:
        return self.correct_mapping


class SentenceBuilderQuestion(Question):
    type: Literal["sentence_builder"] = "sentence_builder"
    words: list[str] = Field(default_factory=list)  # Tiles offered to the learner
    correct_order: list[str]

    def canonical_answer(self) -> list[str]:
        return self.correct_order


class EssayQuestion(Question):
    type: Literal["essay"] = "essay"
    prompt: str = ""
    key_points: list[str] = Field(default_factory=list)
    min_words: int | None = Field(default=None, ge=0)

    def canonical_answer(self) -> str:
        return self.correct_answer if isinstance(self.correct_answer, str) else ""


AnyQuestion = Annotated[
    Union[
        MultipleChoiceQuestion,
        FillInBlankQuestion,
        DragAndDropQuestion,
        SentenceBuilderQuestion,
        EssayQuestion,
    ],
    Field(discriminator="type"),
]

_question_adapter = TypeAdapter(AnyQuestion)

KNOWN_QUESTION_TYPES = {t.value for t in QuestionType}


def parse_question(data: dict[str, Any]) -> Question:
    """Validate raw question data into the matching question model.

    Unrecognized type tags produce a plain Question so callers can still
    evaluate them with exact comparison.
    """
    if data.get("type") in KNOWN_QUESTION_TYPES:
        return _question_adapter.validate_python(data)
    return Question.model_validate(data)


# ============================================================================
# Learner Profile Models
# ============================================================================


class ErrorPattern(BaseModel):
    type: str  # e.g. "spelling", "grammar", "strategy"
    frequency: int = Field(default=1, ge=0)
    last_occurrence: datetime | None = None
    remedial_suggestion: str | None = None


class LearnerProfile(BaseModel):
    """Learner history supplied by the progress-tracking collaborator.

    Only biases hint ordering and message wording, never correctness.
    """

    user_id: str = ""
    strength_areas: list[str] = Field(default_factory=list)
    weakness_areas: list[str] = Field(default_factory=list)
    preferred_hint_style: HintStyle = HintStyle.DETAILED
    average_response_time: float = Field(default=0.0, ge=0.0)
    success_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    common_mistakes: list[ErrorPattern] = Field(default_factory=list)

    def weak_categories(self) -> set[str]:
        """Weakness areas plus every recorded mistake type."""
        categories = set(self.weakness_areas)
        categories.update(m.type for m in self.common_mistakes if m.frequency > 0)
        return categories

    def has_recurring_mistake(self, error_type: str | None) -> bool:
        if error_type is None:
            return False
        return any(
            m.type == error_type and m.frequency > 0 for m in self.common_mistakes
        )


# ============================================================================
# Evaluation Models
# ============================================================================


class FeedbackContext(BaseModel):
    """Everything known about one evaluation of one learner answer."""

    question: Question
    user_answer: Answer = None
    correct_answer: Answer = None
    attempt_number: int = Field(default=1, ge=1)
    hints_used: int = Field(default=0, ge=0)
    time_spent: float = Field(default=0.0, ge=0.0)  # seconds
    previous_attempts: list[str] = Field(default_factory=list)
    user_profile: LearnerProfile | None = None

    def expected_answer(self) -> Answer:
        if self.correct_answer is not None:
            return self.correct_answer
        return self.question.canonical_answer()


class ComparisonResult(BaseModel):
    classification: Classification
    details: list[str] = Field(default_factory=list)
    score: float = Field(default=0.0, ge=0.0, le=1.0)
    error_type: str | None = None
    total_parts: int = Field(default=1, ge=0)


class Feedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    classification: Classification
    title: str
    message: str
    details: list[str] = Field(default_factory=list)
    encouragement: str | None = None
    next_steps: str | None = None
    score: float = Field(default=0.0, ge=0.0, le=1.0)
    related_concepts: list[str] = Field(default_factory=list)


# ============================================================================
# Hint Models
# ============================================================================


class Hint(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    category: HintCategory
    reveal_percentage: int = Field(ge=0, le=100)
    source: HintSource = HintSource.GENERATED
    level: int = Field(default=0, ge=0)

    @property
    def is_author_provided(self) -> bool:
        return self.source == HintSource.AUTHOR


class HintSequence(BaseModel):
    """Caller-owned hint state for a single exercise attempt session.

    current_index counts revealed hints minus one; it starts at -1 and
    never exceeds max_hints - 1.
    """

    hints: list[Hint] = Field(default_factory=list)
    current_index: int = Field(default=-1, ge=-1)
    max_hints: int = Field(default=3, ge=0)
    adaptive_mode: bool = True
    revealed: list[int] = Field(default_factory=list)  # Positions into hints

    @property
    def is_exhausted(self) -> bool:
        return (
            self.current_index + 1 >= self.max_hints
            or len(self.revealed) >= len(self.hints)
        )

    @property
    def remaining(self) -> int:
        if self.is_exhausted:
            return 0
        return min(
            self.max_hints - (self.current_index + 1),
            len(self.hints) - len(self.revealed),
        )

    def revealed_hints(self) -> list[Hint]:
        return [self.hints[i] for i in self.revealed]
