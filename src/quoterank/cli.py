"""Command-line interface for quoterank."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from quoterank.config.loader import configure_from_cli
from quoterank.config.resolvers import resolve_log_dir, resolve_request_files
from quoterank.config.settings import Settings, set_settings
from quoterank.domain.exceptions import (
    BatchProcessingError,
    ConfigurationError,
    QuoteRankError,
)
from quoterank.runners.pipeline import run_scoring_batch
from quoterank.utils.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the quoterank CLI."""
    parser = argparse.ArgumentParser(
        prog="quoterank",
        description=(
            "Rank supplier quotes against an RFQ by price, lead time, "
            "quality and reliability."
        ),
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    score_p = sub.add_parser("score", help="Score one or more request files")

    mx = score_p.add_mutually_exclusive_group(required=True)
    mx.add_argument(
        "-i",
        "--input",
        nargs="+",
        help="Explicit list of request files (rfq-1.json rfq-2.json ...)",
    )
    mx.add_argument(
        "-d",
        "--input-dir",
        type=str,
        help="Directory containing request files (*.json).",
    )

    score_p.add_argument(
        "-R",
        "--recursive",
        action="store_true",
        help="With --input-dir, search subdirectories recursively.",
    )
    score_p.add_argument(
        "-o",
        "--output",
        required=True,
        help="Directory for result files (created if missing).",
    )

    scoring_group = score_p.add_argument_group("Scoring Options")
    scoring_group.add_argument(
        "-c",
        "--config",
        type=str,
        metavar="PATH",
        help="JSON config document with weights, currencyRates and constants.",
    )
    scoring_group.add_argument(
        "-w",
        "--weight",
        action="append",
        metavar="NAME=VALUE",
        help="Override a weight, e.g. --weight price=0.5 (repeatable).",
    )
    scoring_group.add_argument(
        "-r",
        "--rate",
        action="append",
        metavar="CUR=VALUE",
        help="Currency conversion multiplier, e.g. --rate EUR=1.08 (repeatable).",
    )

    output_group = score_p.add_argument_group("Output Options")
    output_group.add_argument(
        "--format",
        choices=["json", "csv"],
        default="json",
        help="Result file format (default: json).",
    )
    output_group.add_argument(
        "--include-raw",
        action="store_true",
        help="Add un-normalised criteria to JSON results.",
    )

    debug_group = score_p.add_argument_group("Debug Options")
    debug_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with verbose logging.",
    )
    debug_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate configuration and list inputs without scoring.",
    )
    debug_group.add_argument(
        "--log-dir",
        type=str,
        metavar="PATH",
        help="Directory for log files (default: per-user log directory).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the quoterank CLI."""
    args = build_parser().parse_args(argv)

    if args.cmd != "score":
        logging.error("Unknown command: %s", args.cmd)
        sys.exit(2)

    debug_mode = bool(getattr(args, "debug", False))
    try:
        settings = configure_from_cli(args)
        set_settings(settings)

        logger, summary_logger = setup_logging(
            log_dir=str(resolve_log_dir(settings.logging.log_dir)),
            console=settings.logging.console_output,
            level=settings.logging.level.value,
            console_level="DEBUG" if settings.debug_mode else "WARNING",
        )

        if settings.debug_mode:
            logger.debug("Configuration details:")
            for section, values in settings.to_dict().items():
                logger.debug("  %s: %s", section, values)

        try:
            inputs = resolve_request_files(
                args.input,
                args.input_dir,
                recursive=settings.recursive,
            )
        except ValueError as e:
            raise ConfigurationError(
                str(e),
                config_field="input" if args.input else "input_dir",
            ).add_suggestion("Request files must be .json") from e

        out_dir = settings.output.output_dir
        logger.info("Scoring Configuration:")
        logger.info("  Requests: %s", len(inputs))
        logger.info("  Weights: %s", settings.scoring.weights.to_dict())
        logger.info("  Output: %s (%s)", out_dir, settings.output.format.value)

        if settings.dry_run:
            _print_dry_run_summary(settings, list(inputs), out_dir)
            sys.exit(0)

        out_dir.mkdir(parents=True, exist_ok=True)
        res = run_scoring_batch(settings, inputs)

        for outcome in res.outcomes:
            if outcome.success:
                summary_logger.info("  %s -> winner %s", Path(outcome.source).name, outcome.winner or "-")
            else:
                summary_logger.info("  %s -> FAILED %s", Path(outcome.source).name, outcome.error.get("message"))

        sys.exit(0)

    except ConfigurationError as e:
        logging.error("Configuration error: %s", e)
        sys.exit(1)

    except BatchProcessingError as e:
        logging.error("%s", e)
        sys.exit(2)

    except KeyboardInterrupt:
        logging.info("Scoring interrupted by user")
        sys.exit(130)

    except QuoteRankError as e:
        logging.error("Scoring failed: %s", e)
        if debug_mode:
            logging.exception("Full traceback:")
        sys.exit(1)


def _print_dry_run_summary(settings: Settings, inputs: List[str], output_dir: Path) -> None:
    """Print a summary for dry run mode."""
    weights = settings.scoring.weights.to_dict()
    print("\n" + "=" * 60)
    print("DRY RUN SUMMARY")
    print("=" * 60)
    print(f"Request files:      {len(inputs):,}")
    print(f"Output directory:   {output_dir}")
    print(f"Output format:      {settings.output.format.value}")
    print(f"Config document:    {settings.config_path or 'None'}")
    print("Weights (raw):      " + ", ".join(f"{k}={v:g}" for k, v in weights.items()))
    print(f"Currency rates:     {dict(settings.scoring.currency_rates) or 'None'}")
    print("=" * 60)

    if inputs:
        print("Example request files:")
        for i, path in enumerate(inputs[:5]):
            print(f"  {i + 1}. {path}")
        if len(inputs) > 5:
            print(f"  ... and {len(inputs) - 5} more")
    print()


if __name__ == "__main__":
    main()
