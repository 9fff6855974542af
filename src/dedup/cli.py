"""CLI entry point for dedup."""

import argparse
import sys
from pathlib import Path

from dedup import diagnostics
from dedup.errors import ConfigError, EngineInitError, RootError, UsageError

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dedup",
        description="Find duplicate files by content across one or more directory trees",
    )
    parser.add_argument("paths", nargs="*", help="Directories to scan")
    parser.add_argument(
        "--config",
        help="YAML config file (default: $DEDUP_CONFIG or ~/.config/dedup/config.yaml)",
    )
    parser.add_argument(
        "--verbose", action="store_true", default=None, help="Print progress to stderr"
    )
    parser.add_argument(
        "--no-sort",
        dest="sort_output",
        action="store_false",
        default=None,
        help="Report groups in discovery order instead of sorted by digest and path",
    )
    return parser


def cmd_scan(args, sink) -> int:
    """Scan args.paths and print every duplicate group."""
    from dedup.config import load_config
    from dedup.report import print_duplicates
    from dedup.scan import find_duplicates

    config = load_config(Path(args.config) if args.config else None, explicit=bool(args.config))
    for key in ("verbose", "sort_output"):
        value = getattr(args, key)
        if value is not None:
            config[key] = value
    sink.verbose = config["verbose"]

    digest_groups = find_duplicates(args.paths, sink, config)
    print_duplicates(digest_groups, sort=config["sort_output"])
    return EXIT_OK


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    sink = diagnostics.ConsoleSink()

    try:
        if not args.paths:
            raise UsageError("no path arguments provided")
        return cmd_scan(args, sink)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"error: {e.reason}", file=sys.stderr)
    except ConfigError as e:
        sink.emit(diagnostics.from_error(diagnostics.CONFIG_FAILED, e))
    except RootError as e:
        sink.emit(diagnostics.from_error(diagnostics.ROOT_FAILED, e))
    except EngineInitError as e:
        sink.emit(diagnostics.from_error(diagnostics.ENGINE_INIT_FAILED, e))
    return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
