"""Answer evaluation, feedback and hint delivery for grammar exercises.

Architecture:
- AnswerComparator dispatches on the question variant and classifies the
  learner's answer as correct, partial or incorrect with per-part details
- MorphologyMatcher decides whether a mismatched word is an inflection of
  the expected word, a spelling slip, or simply wrong
- FeedbackComposer turns a classification plus the attempt context into a
  titled message with encouragement and next steps
- HintSequencer builds a capped, ordered hint sequence and reveals hints
  one at a time, optionally biased toward a learner's weak categories

Everything here is synchronous and free of I/O. The only mutable value is
the caller-held HintSequence.
"""

from exercises.base import (
    as_list,
    as_mapping,
    as_text,
    normalize_text,
    parse_letter_input,
)
from exercises.comparator import AnswerComparator
from exercises.config import EngineConfig, FeedbackOptions, MatchingConfig
from exercises.feedback import FeedbackComposer, generate_feedback
from exercises.hints import (
    HintSequencer,
    generate_hint_sequence,
    get_next_hint,
    hint_priority,
)
from exercises.morphology import MorphologyMatcher, levenshtein_distance

__all__ = [
    # Comparison
    "AnswerComparator",
    "MorphologyMatcher",
    "levenshtein_distance",
    # Feedback
    "FeedbackComposer",
    "generate_feedback",
    # Hints
    "HintSequencer",
    "generate_hint_sequence",
    "get_next_hint",
    "hint_priority",
    # Config
    "EngineConfig",
    "FeedbackOptions",
    "MatchingConfig",
    # Helpers
    "as_list",
    "as_mapping",
    "as_text",
    "normalize_text",
    "parse_letter_input",
]
