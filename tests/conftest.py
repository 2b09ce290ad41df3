"""Shared pytest fixtures for the Grammar Tutor test suite."""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from exercises import FeedbackOptions
from models import (
    Blank,
    DragAndDropQuestion,
    ErrorPattern,
    EssayQuestion,
    FeedbackContext,
    FillInBlankQuestion,
    LearnerProfile,
    MultipleChoiceQuestion,
    SentenceBuilderQuestion,
)


@pytest.fixture
def mc_question() -> MultipleChoiceQuestion:
    """Create a multiple choice question with two author hints."""
    return MultipleChoiceQuestion(
        id="mc1",
        text="What is the capital of France?",
        options=["London", "Paris", "Berlin", "Madrid"],
        correct_answer="Paris",
        hints=[
            "It is known as the City of Light.",
            "The Eiffel Tower stands there.",
        ],
        explanation="Paris has been the capital of France for centuries.",
    )


@pytest.fixture
def single_blank_question() -> FillInBlankQuestion:
    """Create a one-blank question expecting 'France'."""
    return FillInBlankQuestion(
        id="fib1",
        text="Fill in the country.",
        template="Paris is the capital of {blank}.",
        blanks=[Blank(id="b1", position=1, acceptable_answers=["France"])],
    )


@pytest.fixture
def two_blank_question() -> FillInBlankQuestion:
    """Create a two-blank question expecting 'went' and 'cats'."""
    return FillInBlankQuestion(
        id="fib2",
        text="Complete the sentence.",
        template="She {blank} home to feed her {blank}.",
        blanks=[
            Blank(id="b1", position=1, acceptable_answers=["went"]),
            Blank(id="b2", position=2, acceptable_answers=["cats"]),
        ],
    )


@pytest.fixture
def sentence_question() -> SentenceBuilderQuestion:
    """Create a sentence builder question."""
    return SentenceBuilderQuestion(
        id="sb1",
        text="Put the words in order.",
        words=["sat", "The", "cat", "down"],
        correct_order=["The", "cat", "sat", "down"],
    )


@pytest.fixture
def drag_question() -> DragAndDropQuestion:
    """Create a drag and drop question with three items."""
    return DragAndDropQuestion(
        id="dnd1",
        text="Sort the words by part of speech.",
        items=["run", "happy", "table"],
        targets=["verb", "adjective", "noun"],
        correct_mapping={"run": "verb", "happy": "adjective", "table": "noun"},
    )


@pytest.fixture
def essay_question() -> EssayQuestion:
    """Create an essay question with key points and a minimum length."""
    return EssayQuestion(
        id="essay1",
        text="Describe your weekend.",
        prompt="Write about your weekend in the past tense.",
        key_points=["weekend", "park"],
        min_words=5,
    )


@pytest.fixture
def weak_grammar_profile() -> LearnerProfile:
    """Create a learner profile weak in grammar with recurring spelling slips."""
    return LearnerProfile(
        user_id="learner1",
        weakness_areas=["grammar"],
        success_rate=0.4,
        common_mistakes=[ErrorPattern(type="spelling", frequency=3)],
    )


@pytest.fixture
def make_context():
    """Factory for FeedbackContext with sensible defaults."""

    def factory(question, user_answer=None, **kwargs) -> FeedbackContext:
        return FeedbackContext(question=question, user_answer=user_answer, **kwargs)

    return factory


@pytest.fixture
def encouraging_options() -> FeedbackOptions:
    """Options with encouragement switched on."""
    return FeedbackOptions(enable_encouragement=True)
