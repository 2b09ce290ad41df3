"""Tests for the practice CLI in main.py.

Interactive sessions are simulated by mocking Console.input().
"""

import json
from typing import Any

import pytest
from rich.console import Console

import main
from exercises import FeedbackOptions, generate_feedback
from models import (
    Classification,
    DragAndDropQuestion,
    EssayQuestion,
    FeedbackContext,
    FillInBlankQuestion,
    MultipleChoiceQuestion,
    SentenceBuilderQuestion,
)
from ui import PracticeUI


class InputSequence:
    """Callable providing sequential inputs for mocked Console.input().

    Tracks all prompts received for debugging failed tests.
    """

    def __init__(self, inputs: list[str]):
        self.inputs = inputs
        self.index = 0
        self.call_history: list[tuple[int, Any]] = []

    def __call__(self, prompt: Any = "") -> str:
        """Return next input in sequence, tracking prompts received."""
        self.call_history.append((self.index, prompt))
        if self.index >= len(self.inputs):
            history = "\n".join(f"  {i}: {p}" for i, p in self.call_history)
            raise StopIteration(
                f"Ran out of inputs at call {self.index}.\n"
                f"Prompt: {prompt}\n"
                f"History:\n{history}"
            )
        result = self.inputs[self.index]
        self.index += 1
        return result

    @property
    def remaining(self) -> int:
        """Number of unused inputs remaining."""
        return len(self.inputs) - self.index


@pytest.fixture
def console() -> Console:
    return Console(record=True, width=100)


@pytest.fixture
def session_runner(monkeypatch, console):
    """Fixture providing a patched run_practice runner.

    Returns a callable taking the questions and typed inputs; it returns the
    session summary and the recorded console output.
    """

    def runner(questions, inputs: list[str], options=None, max_attempts=3):
        sequence = InputSequence(inputs)
        monkeypatch.setattr(Console, "input", sequence)
        ui = PracticeUI(console)
        summary = main.run_practice(
            questions,
            ui,
            options or FeedbackOptions(),
            max_attempts=max_attempts,
        )
        assert sequence.remaining == 0
        return summary, console.export_text()

    return runner


def write_bank(path, data) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)


class TestParseAnswerInput:
    """Tests for turning typed input into answer shapes."""

    def test_multiple_choice_letter(self, mc_question):
        assert main.parse_answer_input(mc_question, "b") == "Paris"

    def test_multiple_choice_number(self, mc_question):
        assert main.parse_answer_input(mc_question, "3") == "Berlin"

    def test_multiple_choice_text(self, mc_question):
        assert main.parse_answer_input(mc_question, " Paris ") == "Paris"

    def test_multiple_choice_out_of_range(self, mc_question):
        assert main.parse_answer_input(mc_question, "7") == "7"

    def test_option_text_beats_letter(self):
        """Typing an option's own text selects it, even when it is one letter."""
        question = MultipleChoiceQuestion(
            id="articles",
            text="I saw ___ elephant.",
            options=["an", "a", "the"],
            correct_answer="an",
        )

        assert main.parse_answer_input(question, "a") == "a"
        assert main.parse_answer_input(question, "A") == "a"
        assert main.parse_answer_input(question, "c") == "the"

        feedback = generate_feedback(
            FeedbackContext(
                question=question,
                user_answer=main.parse_answer_input(question, "a"),
            )
        )
        assert feedback.classification == Classification.INCORRECT

    def test_fill_in_blank_split_on_bar(self, two_blank_question):
        assert main.parse_answer_input(two_blank_question, "went | cats") == [
            "went",
            "cats",
        ]

    def test_sentence_builder_words(self, sentence_question):
        assert main.parse_answer_input(sentence_question, "The cat  sat") == [
            "The",
            "cat",
            "sat",
        ]

    def test_drag_and_drop_pairs(self, drag_question):
        answer = main.parse_answer_input(
            drag_question, "run=verb, happy = adjective, junk"
        )
        assert answer == {"run": "verb", "happy": "adjective"}

    def test_essay_kept_whole(self, essay_question):
        assert main.parse_answer_input(essay_question, " I went out. ") == "I went out."


class TestLoadQuestions:
    """Tests for loading question banks."""

    def test_bundled_bank(self):
        """The bundled bank covers every question variant."""
        questions = main.load_questions()
        kinds = {type(q) for q in questions}

        assert {
            MultipleChoiceQuestion,
            FillInBlankQuestion,
            DragAndDropQuestion,
            SentenceBuilderQuestion,
            EssayQuestion,
        } <= kinds

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "bank.json"
        write_bank(
            path,
            [
                {
                    "id": "q1",
                    "type": "multiple_choice",
                    "options": ["a", "b"],
                    "correct_answer": "a",
                }
            ],
        )
        questions = main.load_questions(path)

        assert len(questions) == 1
        assert isinstance(questions[0], MultipleChoiceQuestion)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "bank.json"
        write_bank(path, {"id": "q1"})
        with pytest.raises(ValueError):
            main.load_questions(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bank.json"
        path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            main.load_questions(path)

    def test_invalid_question(self, tmp_path):
        path = tmp_path / "bank.json"
        write_bank(path, [{"id": "q1", "type": "multiple_choice"}])
        with pytest.raises(ValueError):
            main.load_questions(path)


class TestRunPractice:
    """Integration tests for an interactive practice session."""

    def test_correct_first_try(self, session_runner, mc_question):
        summary, output = session_runner([mc_question], ["b"])

        assert len(summary.results) == 1
        assert summary.results[0].classification == Classification.CORRECT
        assert summary.results[0].title == "Perfect!"
        assert "Session Summary" in output

    def test_hint_then_retry(self, session_runner, mc_question):
        """A hint is shown, a wrong answer retried, then answered correctly."""
        summary, output = session_runner([mc_question], ["h", "a", "b"])

        result = summary.results[0]
        assert result.classification == Classification.CORRECT
        assert result.title == "Correct!"
        assert summary.hints_used == 1
        assert "Hint 1/3" in output
        assert "Not quite right" in output

    def test_attempts_run_out(self, session_runner, mc_question):
        """The last attempt is recorded even when wrong."""
        summary, output = session_runner([mc_question], ["a", "c"], max_attempts=2)

        assert summary.results[0].classification == Classification.INCORRECT
        assert "Explanation:" in output

    def test_hints_run_out(self, session_runner, single_blank_question):
        """Asking past the cap reports that no hints are left."""
        summary, output = session_runner(
            [single_blank_question], ["h", "h", "h", "France"]
        )

        assert summary.hints_used == 2
        assert "No more hints" in output
        assert summary.results[0].classification == Classification.CORRECT

    def test_partial_answer(self, session_runner, two_blank_question):
        """A partially right answer earns partial credit on the last attempt."""
        summary, output = session_runner(
            [two_blank_question], ["went | dogs"], max_attempts=1
        )

        assert summary.results[0].classification == Classification.PARTIAL
        assert "Almost there!" in output

    def test_empty_input_reprompts(self, session_runner, mc_question):
        summary, output = session_runner([mc_question], ["", "b"])

        assert summary.results[0].classification == Classification.CORRECT
        assert "Please type an answer" in output

    def test_quit_early(self, session_runner, mc_question, drag_question):
        """Quitting ends the session without recording a result."""
        summary, output = session_runner([mc_question, drag_question], ["q"])

        assert summary.results == []
        assert "Goodbye" in output

    def test_multiple_questions(self, session_runner, mc_question, drag_question):
        summary, _ = session_runner(
            [mc_question, drag_question],
            ["Paris", "run=verb, happy=adjective, table=noun"],
        )

        assert [r.classification for r in summary.results] == [
            Classification.CORRECT,
            Classification.CORRECT,
        ]


class TestRunFromArgs:
    """Tests for the CLI entry point."""

    def test_missing_file_exits_with_error(self, tmp_path, console):
        args = main.create_parser().parse_args(
            ["practice", "--questions", str(tmp_path / "missing.json")]
        )

        assert main.run_from_args(args, console) == 1
        assert "Could not load questions" in console.export_text()

    def test_empty_bank(self, tmp_path, console):
        path = tmp_path / "bank.json"
        write_bank(path, [])
        args = main.create_parser().parse_args(["practice", "-q", str(path)])

        assert main.run_from_args(args, console) == 1

    def test_full_session(self, tmp_path, console, monkeypatch):
        path = tmp_path / "bank.json"
        write_bank(
            path,
            [
                {
                    "id": "q1",
                    "type": "multiple_choice",
                    "text": "Pick the plural of child",
                    "options": ["childs", "children"],
                    "correct_answer": "children",
                }
            ],
        )
        monkeypatch.setattr(Console, "input", InputSequence(["b"]))
        args = main.create_parser().parse_args(
            ["practice", "-q", str(path), "--encouragement", "--tone", "strict"]
        )

        assert main.run_from_args(args, console) == 0
        output = console.export_text()
        assert "Well done. The answer is correct." in output
        assert "effort" in output.lower()

    def test_parser_defaults(self):
        args = main.create_parser().parse_args(["practice"])

        assert args.questions == main.DEFAULT_QUESTIONS_FILE
        assert args.max_attempts == 3
        assert args.tone == "encouraging"
        assert args.encouragement is False
        assert args.weak_area == []
