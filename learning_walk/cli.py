"""
Learning Walk command-line interface.

Record classroom observations, review them, export them to CSV and
compose feedback emails.

Usage:
    learning-walk add --date-time 2024-03-01T09:00 --year-group "Year 8" --teacher "J. Smith"
    learning-walk list
    learning-walk show 1
    learning-walk export [--output-dir DIR]
    learning-walk feedback --saved 1 [--to ADDRESS] [--print-only]

Examples:
    # Save an observation with two strategies seen
    learning-walk add --date-time 2024-03-01T09:00 --year-group "Year 8" \\
        --teacher "J. Smith" --notes "Good pacing." \\
        --strategy miniWhiteboards --strategy coldCalling

    # Compose feedback from the newest saved observation
    learning-walk feedback --saved 1

    # Export everything to output/exports/learning_walks_<date>.csv
    learning-walk export
"""

import argparse
import logging
import sys
import webbrowser
from pathlib import Path
from typing import List, Optional

from .export.details import render_details, render_summary
from .models.constants import STRATEGY_KEYS, STRATEGY_LABELS, YEAR_GROUPS
from .session import LearningWalkSession
from .storage.observation_store import FileSlotStorage, ObservationStore
from .utils.config import VALID_LOG_LEVELS, Config
from .utils.logger import setup_logger


logger = logging.getLogger(__name__)


def add_form_arguments(parser: argparse.ArgumentParser):
    """Add the observation form fields to a subcommand parser."""
    parser.add_argument(
        "--date-time",
        default="",
        help="Observation date and time (YYYY-MM-DDTHH:MM)"
    )
    parser.add_argument(
        "--year-group",
        default="",
        choices=YEAR_GROUPS,
        metavar="YEAR_GROUP",
        help=f"Year group ({', '.join(YEAR_GROUPS)})"
    )
    parser.add_argument(
        "--teacher",
        default="",
        help="Class teacher name"
    )
    parser.add_argument(
        "--notes",
        default="",
        help="Observation notes"
    )
    parser.add_argument(
        "--strategy",
        action="append",
        default=[],
        choices=STRATEGY_KEYS,
        metavar="STRATEGY",
        help=f"Teaching strategy observed, repeatable ({', '.join(STRATEGY_KEYS)})"
    )


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="learning-walk",
        description="Record and manage classroom learning-walk observations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--data-dir",
        help="Directory holding stored observations (overrides LEARNING_WALK_DATA_DIR)"
    )

    parser.add_argument(
        "--log-level",
        choices=VALID_LOG_LEVELS,
        help="Logging level (overrides LOG_LEVEL, default: INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Save a new observation")
    add_form_arguments(add_parser)

    subparsers.add_parser("list", help="List saved observations, newest first")

    show_parser = subparsers.add_parser("show", help="Show one saved observation")
    show_parser.add_argument("reference", help="List position (1 is newest) or observation id")

    export_parser = subparsers.add_parser("export", help="Export all observations to CSV")
    export_parser.add_argument(
        "--output-dir",
        help="Directory to write the CSV file to (default: <OUTPUT_DIR>/exports)"
    )

    feedback_parser = subparsers.add_parser("feedback", help="Compose a feedback email")
    add_form_arguments(feedback_parser)
    feedback_parser.add_argument(
        "--saved",
        metavar="REFERENCE",
        help="Compose from a saved observation (list position or id) instead of the form"
    )
    feedback_parser.add_argument(
        "--to",
        help="Recipient address (overrides FEEDBACK_RECIPIENT)"
    )
    feedback_parser.add_argument(
        "--print-only",
        action="store_true",
        help="Print the email instead of opening the mail client"
    )

    subparsers.add_parser("strategies", help="List strategy keys and year groups")

    args = parser.parse_args(argv)

    if args.command == "feedback" and args.saved and form_arguments_given(args):
        feedback_parser.error("--saved cannot be combined with form options")

    return args


def form_arguments_given(args: argparse.Namespace) -> bool:
    """True if any observation form option was passed."""
    return bool(args.date_time or args.year_group or args.teacher or args.notes or args.strategy)


def fill_form(session: LearningWalkSession, args: argparse.Namespace):
    """Copy form arguments into the session form."""
    session.form.set_field("date_time", args.date_time)
    session.form.set_field("year_group", args.year_group)
    session.form.set_field("teacher_name", args.teacher)
    session.form.set_field("observation_notes", args.notes)
    for key in args.strategy:
        session.form.set_strategy(key, True)


def command_add(session: LearningWalkSession, args: argparse.Namespace) -> int:
    fill_form(session, args)

    result = session.save()
    if result.is_failure:
        print(f"ERROR: {result.message}")
        return 1

    observation = result.value
    print(f"✓ Saved observation for {observation.teacher_name} ({observation.year_group})")
    if result.message:
        print(f"WARNING: {result.message}")
    return 0


def command_list(session: LearningWalkSession, args: argparse.Namespace) -> int:
    observations = session.observations
    if not observations:
        print("No observations saved yet.")
        return 0

    for idx, observation in enumerate(observations, 1):
        print(f"{idx:2d}. {render_summary(observation)}")
    return 0


def command_show(session: LearningWalkSession, args: argparse.Namespace) -> int:
    observation = session.find(args.reference)
    if observation is None:
        print(f"ERROR: No saved observation matches '{args.reference}'")
        return 1

    print(render_details(observation))
    return 0


def command_export(session: LearningWalkSession, args: argparse.Namespace) -> int:
    output_dir = Path(args.output_dir) if args.output_dir else None

    result = session.export_csv(output_dir)
    if result.is_failure:
        print(f"ERROR: {result.message}")
        return 1

    print(f"✓ Exported {len(session.observations)} observations to: {result.value}")
    return 0


def command_feedback(
    session: LearningWalkSession,
    args: argparse.Namespace,
    default_recipient: Optional[str] = None
) -> int:
    observation = None
    if args.saved:
        observation = session.find(args.saved)
        if observation is None:
            print(f"ERROR: No saved observation matches '{args.saved}'")
            return 1
    else:
        fill_form(session, args)

    composed = session.compose_feedback(observation)
    if composed.is_failure:
        print(f"ERROR: {composed.message}")
        return 1

    uri = session.compose_uri(composed.value, args.to or default_recipient)

    if args.print_only:
        print(f"Subject: {composed.value.subject}")
        print()
        print(composed.value.body)
        print()
        print(uri)
        return 0

    if not webbrowser.open(uri):
        logger.warning("No handler available for the mail compose URI")
        print("ERROR: Could not open a mail client. Compose URI:")
        print(uri)
        return 1

    print(f"✓ Opened feedback email: {composed.value.subject}")
    return 0


def command_strategies(session: LearningWalkSession, args: argparse.Namespace) -> int:
    print("Teaching strategies:")
    for key in STRATEGY_KEYS:
        print(f"  {key:16s} {STRATEGY_LABELS[key]}")
    print("Year groups:")
    for year_group in YEAR_GROUPS:
        print(f"  {year_group}")
    return 0


COMMANDS = {
    "add": command_add,
    "list": command_list,
    "show": command_show,
    "export": command_export,
    "strategies": command_strategies,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = parse_arguments(argv)
    config = Config()

    logger_root = setup_logger(
        "learning_walk",
        level=getattr(logging, args.log_level or config.log_level, logging.INFO),
        log_file=config.log_file
    )

    try:
        config.validate()

        data_dir = Path(args.data_dir) if args.data_dir else config.data_dir
        config.create_output_directories(data_dir)

        store = ObservationStore(FileSlotStorage(data_dir), key=config.storage_key)
        session = LearningWalkSession(
            store,
            export_dir=config.export_dir,
            compose_scheme=config.compose_scheme
        )

        if args.command == "feedback":
            return command_feedback(session, args, config.feedback_recipient)
        return COMMANDS[args.command](session, args)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        logger_root.info("Interrupted by user")
        return 130

    except Exception as e:
        logger_root.error(f"Unexpected error: {e}", exc_info=True)
        print(f"\nERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
