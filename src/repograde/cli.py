"""CLI entry point: ``repograde grade``."""

from __future__ import annotations

# Phase 1: Singleton logging, before any transitive litellm imports
from repograde.logging_config import setup_logging

setup_logging()

import argparse  # noqa: E402
import asyncio  # noqa: E402
import logging  # noqa: E402
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

from repograde import __version__  # noqa: E402
from repograde.config import Settings  # noqa: E402
from repograde.logging_config import (  # noqa: E402
    cleanup_third_party_handlers,
    set_level,
)
from repograde.resilience.errors import (  # noqa: E402
    ConfigError,
    PersistError,
)
from repograde.services.grading_service import run_grading  # noqa: E402

# Phase 2: Clear litellm's duplicate handlers after all imports
cleanup_third_party_handlers()

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Always returns 0."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        # usage errors are already printed by argparse
        return 0

    if args.version:
        print(f"repograde {__version__}")
        return 0

    if args.command == "grade":
        _run_grade(args)
    else:
        parser.print_help()
    return 0


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="repograde",
        description=(
            "Automated grading of a student repository: "
            "HTML lint, accessibility, git history, and writing quality."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    grade = sub.add_parser(
        "grade",
        help="Grade a repository and write grading.json",
    )
    grade.add_argument(
        "repo_path",
        nargs="?",
        default=".",
        help="Repository root (default: current directory)",
    )
    grade.add_argument(
        "--rubric",
        "-r",
        default=None,
        help="Rubric file (default: rubric.json in the repository root)",
    )
    grade.add_argument(
        "--output",
        "-o",
        default=None,
        help="Report file name in the repository root (default: grading.json)",
    )
    grade.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )
    return parser


def _run_grade(args: argparse.Namespace) -> None:
    """Execute the grade command; errors are logged, never raised."""
    if args.verbose:
        set_level("DEBUG")

    repo_path = Path(args.repo_path).resolve()
    try:
        settings = Settings()
        if args.output:
            settings = settings.model_copy(
                update={"output_filename": args.output}
            )
        if not args.verbose:
            set_level(settings.log_level)

        result = asyncio.run(
            run_grading(
                repo_path,
                settings,
                rubric_path=Path(args.rubric) if args.rubric else None,
            )
        )
    except ConfigError as exc:
        logger.error("event=grading_aborted reason=config error=%s", exc)
        return
    except PersistError as exc:
        logger.error("event=grading_aborted reason=persist error=%s", exc)
        return
    except Exception:
        logger.exception("event=grading_aborted reason=unexpected")
        return

    report = result.report
    if args.verbose:
        for stage in result.stages:
            print(
                f"  [{stage.status}] {stage.stage_name} "
                f"({stage.duration_ms:.0f}ms)"
            )
        for name, points in report.breakdown.items():
            print(f"  {name}: {points}  {report.details.get(name, '')}")

    print(f"Grading completed. Output: {result.output_path.name}")
    print(f"Total score: {report.total}")


if __name__ == "__main__":
    sys.exit(main())
