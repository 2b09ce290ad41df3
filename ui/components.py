from rich import box
from rich.align import Align
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from exercises.base import percent
from models import (
    Classification,
    DragAndDropQuestion,
    EssayQuestion,
    Feedback,
    FillInBlankQuestion,
    Hint,
    MultipleChoiceQuestion,
    Question,
    SentenceBuilderQuestion,
)
from ui.styles import (
    ACCENT_GOLD,
    INFO_BLUE,
    MUTED_GRAY,
    PRIMARY_BLUE,
    TEXT_WHITE,
    create_classification_header,
    get_classification_color,
    get_hint_style,
)


def input_instructions(question: Question) -> str:
    """How the learner should type an answer for this variant."""
    if isinstance(question, MultipleChoiceQuestion):
        return "Type A, B, C, ... or the option text"
    elif isinstance(question, FillInBlankQuestion):
        return "Separate blanks with '|' (e.g., went | home)"
    elif isinstance(question, SentenceBuilderQuestion):
        return "Type the words in order, separated by spaces"
    elif isinstance(question, DragAndDropQuestion):
        return "Type item=category pairs separated by commas"
    elif isinstance(question, EssayQuestion):
        return "Type your answer on one line"
    return "Type your answer"


class QuestionPanel:
    """A styled panel for displaying a question."""

    def __init__(
        self,
        question: Question,
        question_number: int = 0,
        total_questions: int = 0,
        attempt_number: int = 1,
    ):
        self.question = question
        self.question_number = question_number
        self.total_questions = total_questions
        self.attempt_number = attempt_number

    def render(self) -> Panel:
        content = Text()

        if self.total_questions > 0:
            content.append(
                f"Question {self.question_number}/{self.total_questions}",
                Style(color=MUTED_GRAY),
            )
            if self.attempt_number > 1:
                content.append(
                    f"  (attempt {self.attempt_number})", Style(color=MUTED_GRAY)
                )
            content.append("\n")

        content.append(self.question.text, Style(color=PRIMARY_BLUE, bold=True))
        content.append("\n")

        body = self._render_body()
        if body.plain:
            content.append("\n")
            content.append(body)

        return Panel(
            Align.left(content),
            title="Grammar Practice",
            subtitle=f"{input_instructions(self.question)}; 'h' for a hint, 'q' to quit",
            border_style=PRIMARY_BLUE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _render_body(self) -> Text:
        body = Text()
        question = self.question
        if isinstance(question, MultipleChoiceQuestion):
            for i, option in enumerate(question.options):
                body.append(f"{chr(65 + i)}. ", Style(color=ACCENT_GOLD, bold=True))
                body.append(option, Style(color=TEXT_WHITE))
                body.append("\n")
        elif isinstance(question, FillInBlankQuestion):
            if question.template:
                body.append(question.template, Style(color=TEXT_WHITE))
                body.append("\n")
        elif isinstance(question, SentenceBuilderQuestion):
            body.append("Words: ", Style(color=MUTED_GRAY))
            body.append("  ".join(question.words), Style(color=ACCENT_GOLD, bold=True))
            body.append("\n")
        elif isinstance(question, DragAndDropQuestion):
            body.append("Items: ", Style(color=MUTED_GRAY))
            body.append(", ".join(question.items), Style(color=TEXT_WHITE))
            body.append("\nCategories: ", Style(color=MUTED_GRAY))
            body.append(", ".join(question.targets), Style(color=ACCENT_GOLD, bold=True))
            body.append("\n")
        elif isinstance(question, EssayQuestion):
            if question.prompt:
                body.append(question.prompt, Style(color=TEXT_WHITE))
                body.append("\n")
        return body

    def __rich__(self) -> Panel:
        return self.render()


class FeedbackPanel:
    """A styled panel for displaying engine feedback."""

    def __init__(self, feedback: Feedback, explanation: str | None = None):
        self.feedback = feedback
        self.explanation = explanation

    def render(self) -> Panel:
        feedback = self.feedback
        color = get_classification_color(feedback.classification)

        content = Text()
        content.append(
            create_classification_header(feedback.classification, feedback.title)
        )
        content.append("\n")
        content.append(feedback.message, Style(color=TEXT_WHITE))

        if feedback.details:
            content.append("\n\n")
            for detail in feedback.details:
                content.append("• ", Style(color=color))
                content.append(detail, Style(color=TEXT_WHITE))
                content.append("\n")

        if feedback.encouragement:
            content.append("\n")
            content.append(feedback.encouragement, Style(color=ACCENT_GOLD, italic=True))

        if feedback.related_concepts:
            content.append("\n")
            content.append("Related: ", Style(color=MUTED_GRAY))
            content.append(", ".join(feedback.related_concepts), Style(color=INFO_BLUE))

        if feedback.next_steps:
            content.append("\n")
            content.append("Next: ", Style(color=MUTED_GRAY))
            content.append(feedback.next_steps, Style(color=INFO_BLUE))

        if self.explanation:
            content.append("\n\n")
            content.append("Explanation:\n", Style(color=ACCENT_GOLD, bold=True))
            content.append(self.explanation, Style(color=TEXT_WHITE))

        return Panel(
            Align.left(content),
            title=f"Result ({percent(feedback.score)}%)",
            border_style=color,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class HintPanel:
    """A panel showing one revealed hint."""

    def __init__(self, hint: Hint, hint_number: int, max_hints: int):
        self.hint = hint
        self.hint_number = hint_number
        self.max_hints = max_hints

    def render(self) -> Panel:
        content = Text()
        content.append(
            f"[{self.hint.category.value}] ", get_hint_style(self.hint.category)
        )
        content.append(self.hint.content, Style(color=TEXT_WHITE))

        return Panel(
            Align.left(content),
            title=f"Hint {self.hint_number}/{self.max_hints}",
            subtitle=f"reveals ~{self.hint.reveal_percentage}%",
            border_style=ACCENT_GOLD,
            box=box.ROUNDED,
            padding=(0, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class SessionSummary:
    """Track and display results across a practice session."""

    def __init__(self, total: int):
        self.total = total
        self.results: list[Feedback] = []
        self.hints_used = 0

    def update(self, feedback: Feedback, hints_used: int = 0):
        self.results.append(feedback)
        self.hints_used += hints_used

    @property
    def average_score(self) -> float:
        if not self.results:
            return 0.0
        return sum(f.score for f in self.results) / len(self.results)

    def render(self) -> Panel:
        stats = Table(
            show_header=False,
            border_style=MUTED_GRAY,
            box=box.SIMPLE,
        )
        stats.add_column("Label", style=Style(color=MUTED_GRAY))
        stats.add_column("Value", justify="right")

        for classification in Classification:
            count = sum(1 for f in self.results if f.classification == classification)
            stats.add_row(
                classification.value.capitalize(),
                Text(
                    str(count),
                    style=Style(color=get_classification_color(classification)),
                ),
            )
        stats.add_row("Answered", f"{len(self.results)}/{self.total}")
        stats.add_row("Hints used", str(self.hints_used))
        stats.add_row(
            "Average score",
            Text(
                f"{percent(self.average_score)}%",
                style=Style(color=ACCENT_GOLD, bold=True),
            ),
        )

        return Panel(
            Align.center(stats),
            title="Session Summary",
            border_style=ACCENT_GOLD,
            box=box.HEAVY,
            padding=(1, 3),
        )

    def __rich__(self) -> Panel:
        return self.render()
