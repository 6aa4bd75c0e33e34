"""logcodec: turn a crash report into a structured, encoded log entry."""

import logging
import sys
from argparse import ArgumentParser
from datetime import datetime, timezone

from logcodec.config import FORMATS, load_config, load_yaml_config
from logcodec.encoder import render
from logcodec.exception_parser import ParseFailure, parse_exception
from logcodec.log_entry import FIELDS, build_log_entry, chardata_to_string, to_map
from logcodec.validator import validate

logger = logging.getLogger("logcodec")


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="logcodec",
        description="Parse a crash report and print it as an encoded log entry.",
    )
    parser.add_argument(
        "input",
        help="File containing the crash report, or - for stdin",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS,
        help="Output format (default: from config, else json)",
    )
    parser.add_argument(
        "--only",
        nargs="+",
        choices=FIELDS,
        help="Only encode these top-level fields ($schema is always kept)",
    )
    parser.add_argument(
        "--level",
        default="error",
        help="Log level recorded on the entry (default: error)",
    )
    parser.add_argument(
        "--context",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Add a context value (repeatable)",
    )
    parser.add_argument(
        "--config",
        help="Optional YAML config file",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the JSON document against the bundled schema",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def parse_context(pairs: list[str]) -> dict:
    context = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid context value {pair!r}, expected KEY=VALUE")
        context[key] = value
    return context


def read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def run(args) -> int:
    config = load_config(load_yaml_config(args.config))
    fmt = args.format or config.fmt

    result = parse_exception(read_input(args.input))
    if isinstance(result, ParseFailure):
        print(f"Error: input is not a crash report ({result.reason})", file=sys.stderr)
        return 1

    metadata = {
        config.context_key: parse_context(args.context),
        config.event_key: result,
    }
    entry = build_log_entry(
        datetime.now(timezone.utc),
        args.level,
        chardata_to_string(result.log_message()),
        metadata,
        config,
    )

    if args.validate:
        is_valid, errors = validate(to_map(entry, args.only or config.only), config.schema_path)
        if not is_valid:
            for error in errors:
                print(f"Schema error: {error}", file=sys.stderr)
            return 1
        logger.info("Document is valid against the log event schema")

    print(render(entry, fmt, only=args.only, config=config))
    return 0


def main():
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        sys.exit(run(args))
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    try:
        main()
    except BrokenPipeError:
        sys.exit(0)
