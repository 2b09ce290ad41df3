"""Shared helpers for answer handling.

Learner answers arrive in whatever shape the UI produced. These helpers
narrow any value into the shape a comparison branch expects without
raising, so malformed input is graded rather than crashing the engine.
"""

import re
from typing import Any

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Any) -> str:
    """Trim, lowercase and collapse whitespace for loose comparison."""
    if text is None:
        return ""
    return _WHITESPACE.sub(" ", str(text).strip()).lower()


def as_text(answer: Any) -> str:
    """Coerce an answer to a single string.

    Lists are joined with spaces; mappings and None become "".
    """
    if answer is None or isinstance(answer, dict):
        return ""
    if isinstance(answer, (list, tuple)):
        return " ".join(as_text(item) for item in answer).strip()
    return str(answer)


def as_list(answer: Any) -> list[str]:
    """Coerce an answer to a list of strings.

    A bare string is split on whitespace, so "The cat sat" and
    ["The", "cat", "sat"] compare the same.
    """
    if answer is None or isinstance(answer, dict):
        return []
    if isinstance(answer, str):
        return answer.split()
    if isinstance(answer, (list, tuple)):
        return ["" if item is None else str(item) for item in answer]
    return [str(answer)]


def as_mapping(answer: Any) -> dict[str, str]:
    """Coerce an answer to an item -> category mapping."""
    if not isinstance(answer, dict):
        return {}
    return {
        str(key): "" if value is None else str(value) for key, value in answer.items()
    }


def parse_letter_input(user_input: str, max_options: int = 4) -> int | None:
    """Parse letter (A-F) or number (1-6) input to 0-based index.

    Args:
        user_input: Raw user input string.
        max_options: Maximum number of valid options.

    Returns:
        0-based index or None if input is invalid or out of bounds.
    """
    user_input = user_input.strip().upper()
    letter_map = {"A": 0, "B": 1, "C": 2, "D": 3, "E": 4, "F": 5}

    if user_input in letter_map:
        index = letter_map[user_input]
    elif user_input.isdigit():
        index = int(user_input) - 1
    else:
        return None

    if index < 0 or index >= max_options:
        return None

    return index


def percent(fraction: float) -> int:
    return int(round(fraction * 100))
