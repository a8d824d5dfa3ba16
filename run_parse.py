#!/usr/bin/env python3
"""
Command-line driver for Go declaration model extraction.

Parses a single Go file or a directory of Go files and writes the linked
model as JSON.

Usage:
    python run_parse.py --source ./model/color.go
    python run_parse.py --source ./model --filename-pattern '^[a-z].*\\.go$'
    python run_parse.py --config run.yaml --output-file out/model.json
"""

import argparse
import logging
import os
import sys
import time
from typing import List, Optional

from goparse import GoParseError, ParseOptions, parse_directory, parse_file
from shared.run_artifacts import write_model_dump
from shared.run_config import ConfigValidationError, RunConfig, load_run_config
from shared.structured_logging import configure_structured_logging, set_run_id

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Go Declaration Model Extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_parse.py --source ./model/color.go\n"
            "  python run_parse.py --source ./model --output-file out/model.json\n"
        )
    )

    parser.add_argument(
        "--source",
        default=None,
        help="Go file or directory to parse."
    )
    parser.add_argument(
        "--filename-pattern",
        default=None,
        help="Regular expression over base filenames (directory sources only)."
    )
    parser.add_argument(
        "--output-file",
        default=None,
        help="Path of the JSON output. Default: output/parsed_sources.json"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML run configuration; command-line values take precedence."
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=False,
        help="Fail on missing or invalid run configuration instead of using defaults."
    )
    parser.add_argument(
        "--debug-dump",
        action="store_true",
        default=None,
        help="Log the syntax tree of every parsed file at DEBUG level."
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level. Default: INFO"
    )

    return parser.parse_args(argv)


def resolve_run_config(args: argparse.Namespace) -> RunConfig:
    """Merge the optional YAML configuration with command-line overrides."""
    config = RunConfig()
    if args.config:
        config = load_run_config(args.config, strict=args.strict_config)
    return config.with_overrides(
        source=args.source,
        filename_pattern=args.filename_pattern,
        output_file=args.output_file,
        debug_dump=args.debug_dump,
        log_level=args.log_level,
    )


def run(config: RunConfig, run_id: str) -> str:
    """Parse the configured source and write the model.

    Returns:
        Path of the written JSON file.

    Raises:
        FileNotFoundError: If the source does not exist.
        GoParseError: If parsing fails.
    """
    source = config.source
    if not source or not os.path.exists(source):
        raise FileNotFoundError(f"Source not found: {source}")

    options = ParseOptions(debug_dump=config.debug_dump)
    t0 = time.time()
    if os.path.isdir(source):
        sources = parse_directory(source, config.filename_pattern, options)
    else:
        sources = parse_file(source, options)
    logger.info("Parsing completed in %.2fs: %s", time.time() - t0, sources.summary())

    path = write_model_dump(
        sources.to_dict(),
        run_id=run_id,
        output_file=config.output_file,
        source=os.path.abspath(source),
    )
    logger.info(f"Wrote model to {path}")
    return path


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    args = parse_args(argv)

    try:
        config = resolve_run_config(args)
    except ConfigValidationError as e:
        configure_structured_logging()
        logger.error(f"Configuration error: {e}")
        return 1

    configure_structured_logging(getattr(logging, config.log_level))
    run_id = set_run_id()

    try:
        run(config, run_id)
    except FileNotFoundError as e:
        logger.error(f"File error: {e}")
        return 1
    except GoParseError as e:
        logger.error(f"Parse error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
