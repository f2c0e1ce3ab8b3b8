"""
FactPick CLI - Command-line interface for the engine.

Usage:
    factpick validate <dataset>     Check a dataset file for problems
    factpick play <dataset>         Play a game in the terminal
    factpick serve                  Run the HTTP API (needs FACTPICK_DATASET)
"""

import argparse
import logging
import os
import sys
import time
from dataclasses import replace


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="FactPick - Trivia Question Engine",
        prog="factpick",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a dataset file")
    validate_parser.add_argument("dataset", help="Path to a JSON or SQLite dataset")
    validate_parser.add_argument(
        "--options", type=int, default=3, help="Options per question to check against"
    )

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("dataset", help="Path to a JSON or SQLite dataset")
    play_parser.add_argument("--options", type=int, help="Options per question")
    play_parser.add_argument("--seed", type=int, help="Random seed")
    play_parser.add_argument("--score-file", help="Where to keep the best streak")
    play_parser.add_argument(
        "--keep-going", action="store_true", help="A miss does not end the game"
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--dataset", help="Dataset path (overrides FACTPICK_DATASET)")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s",
    )

    if args.command == "validate":
        return cmd_validate(args)
    elif args.command == "play":
        return cmd_play(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        return 1


def cmd_validate(args) -> int:
    """Validate a dataset file."""
    from .errors import DataFormatError
    from .loaders import read_raw_dataset, validate_dataset

    print(f"Validating: {os.path.basename(args.dataset)}")
    try:
        data = read_raw_dataset(args.dataset)
    except DataFormatError as e:
        print(f"  x {e}")
        return 1

    result = validate_dataset(data, options_per_question=args.options)
    for error in result.errors:
        print(f"  x {error}")
    for warning in result.warnings:
        print(f"  ! {warning}")

    if not result.valid:
        print(f"Validation failed with {len(result.errors)} error(s)")
        return 1

    print(f"  ok {result.pick_count} picks validated")
    if result.fact_count:
        print(f"  ok {result.fact_count} distinct facts")
    if result.property_count:
        print(f"  ok {result.property_count} distinct properties")
    return 0


def cmd_play(args) -> int:
    """Play a game in the terminal."""
    from .config import GameConfig
    from .engine_core.question import Exhausted
    from .errors import DataFormatError
    from .loaders import loader_for
    from .session import GameEngine, InMemoryScoreStore, JsonFileScoreStore, TIMEOUT_ANSWER

    config = GameConfig.from_env()
    overrides = {}
    if args.options is not None:
        overrides["options_per_question"] = args.options
    if args.seed is not None:
        overrides["random_seed"] = args.seed
    if args.keep_going:
        overrides["miss_ends_game"] = False
        overrides["timeout_ends_game"] = False
    config = replace(config, **overrides)

    score_store = JsonFileScoreStore(args.score_file) if args.score_file else InMemoryScoreStore()
    engine = GameEngine(loader_for(args.dataset), args.dataset, config=config, score_store=score_store)

    try:
        engine.initialize()
    except DataFormatError as e:
        print(f"Failed to load game data: {e}")
        for error in e.errors:
            if error != str(e):
                print(f"  - {error}")
        return 1

    result = engine.start_game()
    while True:
        if isinstance(result, Exhausted):
            print("\nNo more questions available!")
            break

        print(f"\n[{result.category}] {result.text}")
        for i, option in enumerate(result.options, start=1):
            print(f"  {i}. {option.name}")

        answer = _read_answer(len(result.options), engine.current_time_limit)
        if answer is None:
            print("\nBye!")
            return 0
        if answer != TIMEOUT_ANSWER:
            answer -= 1

        outcome = engine.submit_answer(answer)
        correct = outcome.question.correct_option
        if outcome.is_correct:
            print("CORRECT!")
        elif outcome.timed_out:
            print(f"TIME'S UP! It was {correct.name}.")
        else:
            print(f"WRONG! It was {correct.name}.")

        if outcome.game_over:
            break
        result = engine.generate_next_question()

    print(f"\nYou got {engine.score} correct ({engine.questions_answered} answered).")
    print(f"Best streak: {engine.best_streak}")
    return 0


def _read_answer(option_count: int, time_limit: float) -> int | None:
    """
    Prompt until a valid option number is entered.

    Returns the 1-based choice, TIMEOUT_ANSWER when the time limit passed
    before a valid answer, or None when input is closed.
    """
    from .session import TIMEOUT_ANSWER

    started = time.monotonic()
    while True:
        try:
            raw = input(f"Your answer (1-{option_count}, {time_limit:.1f}s): ")
        except (EOFError, KeyboardInterrupt):
            return None
        if time.monotonic() - started > time_limit:
            return TIMEOUT_ANSWER
        try:
            choice = int(raw.strip())
        except ValueError:
            continue
        if 1 <= choice <= option_count:
            return choice


def cmd_serve(args) -> int:
    """Run the HTTP API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("uvicorn not installed. Install with: pip install uvicorn")
        return 1

    if args.dataset:
        os.environ["FACTPICK_DATASET"] = args.dataset

    from .api import create_app
    from .errors import DataFormatError

    try:
        app = create_app()
    except (DataFormatError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
