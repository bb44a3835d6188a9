"""loadspec — turn a search slowlog on stdin into a replayable NDJSON loadspec."""

import logging
import sys
from argparse import ArgumentParser

from loadspec.config import LOG_LEVELS, load_config, load_yaml_config
from loadspec.emitter import report_duration
from loadspec.models import LoadspecError
from loadspec.pipeline import run
from loadspec.reader import open_text_input, read_lines

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="loadspec",
        description="Outputs a replayable loadspec based on the slowlog read from stdin.",
    )
    parser.add_argument(
        "target_url",
        nargs="?",
        help="Override the host of every request; only scheme://host[:port] is kept",
    )
    parser.add_argument(
        "--index_override",
        action="append",
        metavar="INDEX",
        help="Override slowlog indexes. Repeat the flag (or pass a comma-separated list) "
             "to spread the load test over many indexes",
    )
    parser.add_argument(
        "--max_duration",
        metavar="DURATION",
        help="Maximum duration of the generated loadspec, e.g. 90s or 1h30m (default: unlimited)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Diagnostic log level on stderr (default: WARNING)",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [loadspec] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args, load_yaml_config(args.config))
        logging.getLogger().setLevel(config.log_level)
        logger.debug("Config: %s", config)

        lines = read_lines(open_text_input(sys.stdin.buffer))
        result = run(lines, config, sys.stdout)
    except LoadspecError as e:
        sys.stdout.flush()
        logger.error("%s", e)
        return 1

    sys.stdout.flush()
    report_duration(result.elapsed_nanos, sys.stderr)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
