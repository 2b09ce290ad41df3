import argparse
import json
import logging
import sys
import time
from pathlib import Path

from rich.console import Console

from exercises import (
    AnswerComparator,
    EngineConfig,
    FeedbackOptions,
    MatchingConfig,
    generate_feedback,
    generate_hint_sequence,
    get_next_hint,
    normalize_text,
    parse_letter_input,
)
from models import (
    Answer,
    Classification,
    DragAndDropQuestion,
    FeedbackContext,
    FillInBlankQuestion,
    LearnerProfile,
    MultipleChoiceQuestion,
    Question,
    SentenceBuilderQuestion,
    Tone,
    parse_question,
)
from ui import PracticeUI
from ui.components import SessionSummary

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_QUESTIONS_FILE = DATA_DIR / "questions.json"


def load_questions(path: Path = DEFAULT_QUESTIONS_FILE) -> list[Question]:
    """Load a question bank: a JSON list of question objects.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the JSON or a question in it is malformed.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of questions")
    return [parse_question(item) for item in data]


def parse_answer_input(question: Question, raw: str) -> Answer:
    """Turn typed input into the answer shape the question variant expects."""
    raw = raw.strip()
    if isinstance(question, MultipleChoiceQuestion):
        # Option text wins over letters: "a" may be the article, not option A
        for option in question.options:
            if normalize_text(option) == normalize_text(raw):
                return option
        index = parse_letter_input(raw, len(question.options))
        if index is not None and len(raw) == 1:
            return question.options[index]
        return raw
    elif isinstance(question, FillInBlankQuestion):
        return [part.strip() for part in raw.split("|")]
    elif isinstance(question, SentenceBuilderQuestion):
        return raw.split()
    elif isinstance(question, DragAndDropQuestion):
        mapping: dict[str, str] = {}
        for pair in raw.split(","):
            item, sep, category = pair.partition("=")
            if sep and item.strip():
                mapping[item.strip()] = category.strip()
        return mapping
    return raw


def run_practice(
    questions: list[Question],
    ui: PracticeUI,
    options: FeedbackOptions,
    max_attempts: int = 3,
    profile: LearnerProfile | None = None,
    matching: MatchingConfig | None = None,
) -> SessionSummary:
    """Run a practice session over the given questions.

    Each question allows up to max_attempts answers. Typing 'h' reveals the
    next hint; typing 'q' ends the session early.
    """
    comparator = AnswerComparator(config=matching)
    summary = ui.create_summary(len(questions))

    for number, question in enumerate(questions, start=1):
        sequence = generate_hint_sequence(question, options)
        hints_used = 0
        attempt = 1
        previous_attempts: list[str] = []
        started = time.monotonic()

        while attempt <= max_attempts:
            raw = ui.show_question(question, number, len(questions), attempt)

            if raw == "quit":
                ui.show_quit_message()
                ui.show_summary()
                return summary

            context = FeedbackContext(
                question=question,
                attempt_number=attempt,
                hints_used=hints_used,
                time_spent=time.monotonic() - started,
                previous_attempts=previous_attempts,
                user_profile=profile,
            )

            if raw == "hint":
                hint = get_next_hint(sequence, context)
                if hint is None:
                    ui.show_no_more_hints()
                else:
                    hints_used += 1
                    ui.show_hint(hint, hints_used, sequence.max_hints)
                continue

            context = context.model_copy(
                update={"user_answer": parse_answer_input(question, raw)}
            )
            feedback = generate_feedback(context, options, comparator)
            logger.debug(
                "Question %s attempt %d: %s (%.2f)",
                question.id,
                attempt,
                feedback.classification.value,
                feedback.score,
            )

            done = (
                feedback.classification == Classification.CORRECT
                or attempt == max_attempts
            )
            ui.show_feedback(feedback, question.explanation if done else None)
            if done:
                ui.record_result(feedback, hints_used)
                break

            previous_attempts.append(raw)
            attempt += 1

    ui.show_summary()
    return summary


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(description="Grammar Tutor")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    practice_parser = subparsers.add_parser(
        "practice", help="Answer grammar questions with feedback and hints"
    )
    practice_parser.add_argument(
        "--questions",
        "-q",
        type=Path,
        default=DEFAULT_QUESTIONS_FILE,
        help="Question bank JSON file (default: data/questions.json)",
    )
    practice_parser.add_argument(
        "--max-attempts",
        "-a",
        type=int,
        default=3,
        help="Attempts allowed per question (default: 3)",
    )
    practice_parser.add_argument(
        "--max-hints",
        type=int,
        default=3,
        help="Hints that may be revealed per question (default: 3)",
    )
    practice_parser.add_argument(
        "--encouragement",
        "-e",
        action="store_true",
        help="Include encouragement in feedback",
    )
    practice_parser.add_argument(
        "--tone",
        "-t",
        choices=[t.value for t in Tone],
        default=Tone.ENCOURAGING.value,
        help="Feedback tone (default: encouraging)",
    )
    practice_parser.add_argument(
        "--no-adaptive",
        action="store_true",
        help="Reveal hints in strict order and skip related concepts",
    )
    practice_parser.add_argument(
        "--weak-area",
        action="append",
        default=[],
        help="Hint category to prioritize (repeatable, e.g. grammar)",
    )
    practice_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log evaluation details",
    )
    return parser


def run_from_args(args: argparse.Namespace, console: Console | None = None) -> int:
    """Run the practice command; returns a process exit status."""
    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ui = PracticeUI(console)

    try:
        questions = load_questions(args.questions)
    except (OSError, ValueError) as e:
        ui.show_error(f"Could not load questions from {args.questions}: {e}")
        return 1

    if not questions:
        ui.show_error(f"No questions found in {args.questions}")
        return 1

    config = EngineConfig(
        feedback=FeedbackOptions(
            enable_encouragement=args.encouragement,
            tone=Tone(args.tone),
            enable_adaptive=not args.no_adaptive,
            max_hints=max(args.max_hints, 0),
        )
    )
    profile = LearnerProfile(weakness_areas=args.weak_area) if args.weak_area else None

    ui.show_info(f"Loaded {len(questions)} questions from {args.questions}\n")
    run_practice(
        questions,
        ui,
        config.feedback,
        max_attempts=max(args.max_attempts, 1),
        profile=profile,
        matching=config.matching,
    )
    return 0


def main():
    """Main entry point with CLI routing."""
    parser = create_parser()
    args = parser.parse_args(sys.argv[1:] or ["practice"])
    if args.command != "practice":
        parser.print_help()
        sys.exit(2)
    sys.exit(run_from_args(args))


if __name__ == "__main__":
    main()
