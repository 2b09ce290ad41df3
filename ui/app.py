from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from models import Feedback, Hint, Question
from ui.components import FeedbackPanel, HintPanel, QuestionPanel, SessionSummary
from ui.styles import DEFAULT_THEME, ERROR_RED, INFO_BLUE, MUTED_GRAY


class PracticeUI:
    """Main UI orchestrator for a grammar practice session."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(theme=DEFAULT_THEME)
        self._summary: SessionSummary | None = None

    def show_question(
        self,
        question: Question,
        question_number: int,
        total_questions: int,
        attempt_number: int = 1,
    ) -> str:
        """Display a question and return the learner's raw input.

        Returns:
            "quit" if the learner quits, "hint" if they ask for a hint,
            otherwise the typed answer.
        """
        panel = QuestionPanel(
            question=question,
            question_number=question_number,
            total_questions=total_questions,
            attempt_number=attempt_number,
        )
        self.console.print(panel)
        self.console.print()
        return self.ask_answer()

    def ask_answer(self) -> str:
        """Prompt until the learner types something."""
        while True:
            user_input = self.console.input(
                Text("Your answer: ", style=f"bold {MUTED_GRAY}")
            ).strip()

            if user_input.lower() == "q":
                return "quit"
            if user_input.lower() == "h":
                return "hint"
            if user_input:
                return user_input

            self.console.print(
                Text(
                    "Please type an answer ('h' for a hint, 'q' to quit)\n",
                    style=ERROR_RED,
                )
            )

    def show_feedback(self, feedback: Feedback, explanation: str | None = None) -> None:
        self.console.print(FeedbackPanel(feedback, explanation=explanation))
        self.console.print()

    def show_hint(self, hint: Hint, hint_number: int, max_hints: int) -> None:
        self.console.print(HintPanel(hint, hint_number, max_hints))
        self.console.print()

    def show_no_more_hints(self) -> None:
        self.console.print(Text("No more hints for this question.\n", style=MUTED_GRAY))

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(
            Panel(
                Text(f"Error: {message}", style=ERROR_RED),
                title="Error",
                border_style=ERROR_RED,
            )
        )

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(Text(message, style=INFO_BLUE))

    def show_quit_message(self) -> None:
        self.console.print()
        self.console.print(Text("Goodbye! Keep practicing.", style=MUTED_GRAY))

    def create_summary(self, total: int) -> SessionSummary:
        """Create a new summary for a session."""
        self._summary = SessionSummary(total)
        return self._summary

    def record_result(self, feedback: Feedback, hints_used: int = 0) -> None:
        if self._summary:
            self._summary.update(feedback, hints_used)

    def show_summary(self) -> None:
        if self._summary:
            self.console.print(self._summary)
