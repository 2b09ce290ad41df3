from rich.style import Style
from rich.text import Text
from rich.theme import Theme

from models import Classification, HintCategory

PRIMARY_BLUE = "#2E86C1"
ACCENT_GOLD = "#F1C40F"
SUCCESS_GREEN = "#27AE60"
PARTIAL_ORANGE = "#E67E22"
ERROR_RED = "#C0392B"
INFO_BLUE = "#3498DB"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"

DEFAULT_THEME = Theme(
    {
        "primary": Style(color=PRIMARY_BLUE, bold=True),
        "secondary": Style(color=ACCENT_GOLD, bold=True),
        "success": Style(color=SUCCESS_GREEN),
        "partial": Style(color=PARTIAL_ORANGE, bold=True),
        "error": Style(color=ERROR_RED, bold=True),
        "info": Style(color=INFO_BLUE),
        "muted": Style(color=MUTED_GRAY),
        "option_label": Style(color=ACCENT_GOLD, bold=True),
        "option_text": Style(color=TEXT_WHITE),
        "hint_provided": Style(color=ACCENT_GOLD),
        "hint_strategy": Style(color=INFO_BLUE),
        "hint_grammar": Style(color=PRIMARY_BLUE),
    }
)


def get_classification_color(classification: Classification) -> str:
    """Border/heading color for a feedback classification."""
    colors = {
        Classification.CORRECT: SUCCESS_GREEN,
        Classification.PARTIAL: PARTIAL_ORANGE,
        Classification.INCORRECT: ERROR_RED,
    }
    return colors.get(classification, MUTED_GRAY)


def get_hint_style(category: HintCategory) -> Style:
    styles = {
        HintCategory.PROVIDED: Style(color=ACCENT_GOLD, bold=True),
        HintCategory.STRATEGY: Style(color=INFO_BLUE, bold=True),
        HintCategory.GRAMMAR: Style(color=PRIMARY_BLUE, bold=True),
    }
    return styles.get(category, Style())


def create_classification_header(classification: Classification, title: str) -> Text:
    """Header line with a symbol and the feedback title."""
    symbols = {
        Classification.CORRECT: "✓",
        Classification.PARTIAL: "~",
        Classification.INCORRECT: "✗",
    }
    style = Style(color=get_classification_color(classification), bold=True)
    header = Text()
    header.append(f"{symbols.get(classification, '?')} ", style)
    header.append(title, style)
    return header
