"""Main CLI entry point for comment-sentiment."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ..config import get_cache_dir, get_log_file
from ..pipeline import CONFIG_GAP, CONFIG_MIN_LENGTH, CommentSentimentAnalysis, Pipeline, registry
from ..pipeline.item import FACT_COMMITS_BY_DAY
from ..pipeline.runner import load_commits_by_day, read_commits
from ..sentiment.scoring import ScoringError
from ..settings import AnalysisSettings
from .init_config import init_config

logger = logging.getLogger(__name__)


def setup_logging(log_file: Path | None = None) -> None:
    """Log to a file in the cache directory; warnings also go to stderr."""
    log_file = log_file or get_log_file()
    os.makedirs(log_file.parent, exist_ok=True)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
        handlers=[
            logging.FileHandler(log_file, mode="a"),
            console_handler,
        ],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="comment-sentiment",
        description="Comment sentiment through the history of a repository",
        epilog="Run 'comment-sentiment <command> --help' for more information on a command.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command - analyze a recorded commit stream
    run_parser = subparsers.add_parser(
        "run",
        help="Analyze a JSON-lines commit stream",
        description="Extract comments from UAST changes, score them in one batch and aggregate by day.",
    )
    run_parser.add_argument("input", type=Path, help="JSON-lines file with one commit per line")
    run_parser.add_argument(
        "--commits-by-day",
        type=Path,
        default=None,
        help="JSON mapping of day to commit hashes (default: derived from the input)",
    )
    run_parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Settings file (default: sentiment.yaml in the current directory)",
    )
    for option in CommentSentimentAnalysis().list_configuration_options():
        run_parser.add_argument(
            f"--{option.flag}",
            dest=option.name,
            type=option.type.convert,
            default=None,
            help=f"{option.description} (default: {option.default})",
        )
    run_parser.add_argument(
        "--binary",
        "-b",
        action="store_true",
        help="Write an Arrow IPC stream instead of text",
    )
    run_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (default: stdout)",
    )
    run_parser.add_argument("--no-progress", action="store_true", help="Hide the scoring progress bar")

    # options command - list configuration options
    subparsers.add_parser(
        "options",
        help="List configuration options of the registered analyses",
    )

    # init command - generate settings
    init_parser = subparsers.add_parser(
        "init",
        help="Generate a default sentiment.yaml",
    )
    init_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path("sentiment.yaml"),
        help="Output file path (default: sentiment.yaml)",
    )

    return parser


def resolve_facts(args: argparse.Namespace) -> dict:
    """Merge settings: CLI flags > environment > YAML > defaults."""
    facts = AnalysisSettings.load(args.config).with_env().to_facts()
    for name in (CONFIG_MIN_LENGTH, CONFIG_GAP):
        value = getattr(args, name, None)
        if value is not None:
            facts[name] = value
    if args.commits_by_day:
        facts[FACT_COMMITS_BY_DAY] = load_commits_by_day(args.commits_by_day)
    return facts


def run(args: argparse.Namespace, console: Console) -> int:
    try:
        commits = list(read_commits(args.input))
    except (OSError, ValidationError) as e:
        console.print(f"[red]Error: cannot read {args.input}: {e}[/]")
        return 1

    try:
        facts = resolve_facts(args)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: invalid settings: {e}[/]")
        return 1

    analysis = CommentSentimentAnalysis(show_progress=not args.no_progress)
    pipeline = Pipeline([analysis])
    try:
        results = pipeline.run(commits, facts)
    except ScoringError as e:
        logger.error(f"Scoring failed: {e}")
        console.print(f"[red]Error: {e}[/]")
        return 1

    if args.output:
        if args.binary:
            with open(args.output, "wb") as f:
                pipeline.serialize(results, True, f)
        else:
            with open(args.output, "w", encoding="utf-8") as f:
                pipeline.serialize(results, False, f)
        console.print(f"[green]Wrote {args.output}[/]")
    elif args.binary:
        pipeline.serialize(results, True, sys.stdout.buffer)
    else:
        pipeline.serialize(results, False, sys.stdout)
    return 0


def print_options(console: Console) -> None:
    table = Table(title="Configuration options")
    table.add_column("Analysis", style="cyan")
    table.add_column("Flag", style="green", no_wrap=True)
    table.add_column("Name", no_wrap=True)
    table.add_column("Type")
    table.add_column("Default")
    table.add_column("Description", style="dim")
    for name in registry.names():
        item = registry.summon(name)
        for option in item.list_configuration_options():
            table.add_row(
                name,
                f"--{option.flag}",
                option.name,
                option.type.value,
                str(option.default),
                option.description,
            )
    console.print(table)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for comment-sentiment."""
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console(stderr=True)

    if args.command == "run":
        setup_logging()
        logger.info(f"Analyzing {args.input}, log directory {get_cache_dir()}")
        sys.exit(run(args, console))

    elif args.command == "options":
        print_options(Console())

    elif args.command == "init":
        init_config(args.output, console)

    elif args.command is None:
        parser.print_help()
        sys.exit(0)

    else:
        print(f"Unknown command: {args.command}")
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
