"""Terminal rendering for grammar practice sessions."""

from ui.app import PracticeUI
from ui.components import (
    FeedbackPanel,
    HintPanel,
    QuestionPanel,
    SessionSummary,
)
from ui.styles import (
    ACCENT_GOLD,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
    PARTIAL_ORANGE,
    PRIMARY_BLUE,
    SUCCESS_GREEN,
)

__all__ = [
    "PracticeUI",
    "QuestionPanel",
    "FeedbackPanel",
    "HintPanel",
    "SessionSummary",
    "PRIMARY_BLUE",
    "ACCENT_GOLD",
    "SUCCESS_GREEN",
    "PARTIAL_ORANGE",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
]
