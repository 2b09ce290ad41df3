"""Configuration for answer matching, feedback and hint delivery.

These configuration models let callers tune how lenient matching is, how
feedback is worded, and how many hints a learner may reveal.
"""

from pydantic import BaseModel, Field, model_validator

from models import Tone


class MatchingConfig(BaseModel):
    """Thresholds and partial-credit weights for word matching."""

    short_word_max_distance: int = Field(default=1, ge=0)
    long_word_max_distance: int = Field(default=2, ge=0)
    long_word_length: int = Field(default=5, ge=1)  # Longer than this is "long"
    grammar_credit: float = Field(default=0.7, ge=0.0, le=1.0)
    spelling_credit: float = Field(default=0.5, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_distances(self) -> "MatchingConfig":
        if self.long_word_max_distance < self.short_word_max_distance:
            raise ValueError(
                "long_word_max_distance must be >= short_word_max_distance"
            )
        return self

    def max_distance_for(self, word: str) -> int:
        if len(word) > self.long_word_length:
            return self.long_word_max_distance
        return self.short_word_max_distance


class FeedbackOptions(BaseModel):
    """Options for feedback composition and hint sequencing."""

    enable_encouragement: bool = False
    tone: Tone = Tone.ENCOURAGING
    enable_adaptive: bool = True
    max_hints: int = Field(default=3, ge=0)


class EngineConfig(BaseModel):
    """Master configuration for the feedback engine."""

    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    feedback: FeedbackOptions = Field(default_factory=FeedbackOptions)
