# src/main.py - v1
"""CLI entry point: task, rank, image commands.

Usage:
    talentgen task <name> <input.json> [--seed N]
    talentgen rank <input.json> [--seed N]
    talentgen image <prompt> [--width W] [--height H] [--seed N]

Exit codes: 0 success, 1 error, 2 generation unavailable, 130 interrupted.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from talentgen.core.errors import GenerationUnavailable
from talentgen.core.models import TaskType
from talentgen.version import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNAVAILABLE = 2
EXIT_INTERRUPTED = 130

# Keyword names of GenerationService.run_task itself
_RESERVED_INPUT_KEYS = frozenset({"task", "seed"})


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_ERROR

    try:
        _setup_logging(args.verbose)
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except GenerationUnavailable as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return EXIT_UNAVAILABLE
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="talentgen",
        description=f"talentgen v{__version__} - resilient AI generation for recruiting",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- task ---
    p_task = subparsers.add_parser("task", help="Run one text-generation task")
    p_task.add_argument(
        "name", choices=[t.value for t in TaskType], help="Task identifier",
    )
    p_task.add_argument("input", type=Path, help="JSON file with the task inputs")
    p_task.add_argument("--seed", type=int, default=None, help="Seed override")
    p_task.set_defaults(func=_cmd_task)

    # --- rank ---
    p_rank = subparsers.add_parser(
        "rank", help="Rank candidates for a job and print the outcome as JSON",
    )
    p_rank.add_argument(
        "input", type=Path, help="JSON file with 'job' and 'applications'",
    )
    p_rank.add_argument("--seed", type=int, default=None, help="Seed override")
    p_rank.set_defaults(func=_cmd_rank)

    # --- image ---
    p_image = subparsers.add_parser("image", help="Print an image URL for a prompt")
    p_image.add_argument("prompt", help="Image prompt")
    p_image.add_argument("--width", type=int, default=None)
    p_image.add_argument("--height", type=int, default=None)
    p_image.add_argument("--seed", type=int, default=None)
    p_image.set_defaults(func=_cmd_image)

    return parser


async def _cmd_task(args: argparse.Namespace) -> int:
    """Execute one text task and print its output."""
    from talentgen.api.facade import create_service

    inputs = _load_inputs(args.input)
    async with create_service() as service:
        result = await service.run_task(args.name, seed=args.seed, **inputs)

    if result.stale:
        print(f"Warning: {result.warning}", file=sys.stderr)
    print(result.text)
    return EXIT_OK


async def _cmd_rank(args: argparse.Namespace) -> int:
    """Rank candidates and print the typed outcome."""
    from talentgen.api.facade import create_service

    inputs = _load_inputs(args.input)
    async with create_service() as service:
        report = await service.rank_candidates(
            inputs.get("job"), inputs.get("applications"), seed=args.seed,
        )

    if report.stale:
        print(f"Warning: {report.warning}", file=sys.stderr)
    print(report.model_dump_json(indent=2))
    return EXIT_OK


async def _cmd_image(args: argparse.Namespace) -> int:
    """Print the provider URL (or placeholder) for a prompt."""
    from talentgen.api.facade import create_service

    async with create_service() as service:
        url = await service.generate_image(
            args.prompt, width=args.width, height=args.height, seed=args.seed,
        )
    print(url)
    return EXIT_OK


def _load_inputs(path: Path) -> dict[str, Any]:
    """Read a JSON object of task inputs."""
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    reserved = sorted(data.keys() & _RESERVED_INPUT_KEYS)
    if reserved:
        raise ValueError(
            f"{path} must not contain {', '.join(reserved)} "
            "(pass the task name and --seed on the command line)"
        )
    return data


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage. Output goes to stderr, results to stdout."""
    from talentgen.config.settings import load_settings
    from talentgen.logging.logger import setup_logging

    settings = load_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        stream=sys.stderr,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
