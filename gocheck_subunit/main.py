"""Entry point for the gocheck to subunit reporter.

Reads gocheck test runner output from a file or stdin and writes subunit
v2 events to a file or stdout, optionally followed by a YAML summary of
the reported events.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import BinaryIO

from gocheck_subunit.lifecycle.config import ReporterConfig
from gocheck_subunit.parsing.parser_reporter import ParserReporter
from gocheck_subunit.reporting.sink import Sink, SubunitSink
from gocheck_subunit.reporting.summary import SummarySink


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Convert gocheck test output into a subunit v2 stream"
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Path to the gocheck output (default: stdin)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Path to write the subunit stream (default: stdout)",
    )
    parser.add_argument(
        "--config-file",
        type=Path,
        default=None,
        help="Path to the reporter JSON config file",
    )
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Path to write a YAML summary of reported events",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Echo the gocheck output to stderr while it is parsed",
    )
    return parser.parse_args(argv)


def pump(
    source: BinaryIO,
    parser: ParserReporter,
    chunk_size: int,
    echo: BinaryIO | None = None,
) -> None:
    """Feed *source* to *parser* chunk by chunk until EOF, then flush it."""
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            break
        if echo is not None:
            echo.write(chunk)
            echo.flush()
        parser.write(chunk)
    parser.flush()


def _run(
    args: argparse.Namespace,
    config: ReporterConfig,
    chunk_size: int,
    source: BinaryIO,
    output: BinaryIO,
) -> int:
    summary_path = args.summary or config.summary_file
    summary: SummarySink | None = None
    sink: Sink = SubunitSink(output)
    if summary_path is not None:
        summary = SummarySink(sink)
        sink = summary

    parser = ParserReporter(sink, config.reboot_markers())
    echo = sys.stderr.buffer if args.verbose else None
    pump(source, parser, chunk_size, echo=echo)

    for warning in parser.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    if summary is not None and summary_path is not None:
        try:
            summary.write_yaml(summary_path)
        except OSError as e:
            print(f"Error writing summary: {e}", file=sys.stderr)
            return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    config = ReporterConfig(args.config_file)
    for warning in config.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    try:
        chunk_size = config.chunk_size
    except ValueError as e:
        print(f"Error: Invalid config: {e}", file=sys.stderr)
        return 1

    if args.input is not None:
        try:
            source = open(args.input, "rb")
        except OSError as e:
            print(f"Error: Cannot read input {args.input}: {e}", file=sys.stderr)
            return 1
    else:
        source = sys.stdin.buffer

    try:
        if args.output is not None:
            try:
                args.output.parent.mkdir(parents=True, exist_ok=True)
                output = open(args.output, "wb")
            except OSError as e:
                print(f"Error: Cannot write output {args.output}: {e}", file=sys.stderr)
                return 1
            with output:
                return _run(args, config, chunk_size, source, output)
        return _run(args, config, chunk_size, source, sys.stdout.buffer)
    finally:
        if args.input is not None:
            source.close()


if __name__ == "__main__":
    sys.exit(main())
