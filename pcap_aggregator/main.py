"""
Main entry point for directional traffic distribution analysis
"""

import argparse
import sys

from pcap_aggregator.capture import (
    StreamingAggregator,
    emit_results,
    format_colon_hex,
    load_catalog,
    parse_mac,
    resolve_window,
    select_files,
)
from pcap_aggregator.config import config
from pcap_aggregator.exceptions import DirectoryUnreadable, InvalidTimestamp, MalformedMacAddress
from pcap_aggregator.utils.logging import get_logger, setup_logging
from pcap_aggregator.utils.performance import performance_monitor

# sysexits(3) status codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_IOERR = 74
EXIT_CONFIG = 78
EXIT_INTERRUPTED = 130


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Packet length and inter-arrival distributions for one link direction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Outbound traffic of one host for an hour
  pcap-aggregator --src-mac 00:1a:2b:3c:4d:5e \\
      --first 2022-01-31T10:00:00+09:00 --last 2022-01-31T10:59:59+09:00

  # Captures stored elsewhere, tables written to ./out
  pcap-aggregator --src-mac 00:1a:2b:3c:4d:5e --first 2022-01-31T00:00:00Z \\
      --last 2022-01-31T23:59:59Z --search-path /data/pcap --output-dir out
        """,
    )

    parser.add_argument("--src-mac", required=True, help="Ethernet source MAC address to keep")
    parser.add_argument(
        "--first", required=True, help="Window start, RFC 3339 with offset (inclusive)"
    )
    parser.add_argument(
        "--last", required=True, help="Window end, RFC 3339 with offset (inclusive to the second)"
    )
    parser.add_argument(
        "--search-path",
        default=config.scan.search_path,
        help=f"Directory holding rotated capture files (default: {config.scan.search_path})",
    )
    parser.add_argument(
        "--output-dir",
        default=config.output.output_dir,
        help="Directory for the result tables (default: current directory)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=config.logging.level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("--quiet", action="store_true", help="Disable the progress bar")

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Run one aggregation and return the process exit status"""
    logger = get_logger(__name__)

    config.scan.search_path = args.search_path
    config.scan.show_progress = not args.quiet
    config.output.output_dir = args.output_dir

    # Configuration errors are reported before any I/O
    try:
        src_mac = parse_mac(args.src_mac)
        window = resolve_window(args.first, args.last)
    except (MalformedMacAddress, InvalidTimestamp) as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG

    logger.info(
        f"Source MAC {format_colon_hex(src_mac)}, window {window.first.isoformat()} "
        f"to {window.last.isoformat()} ({window.first_micros}..{window.last_micros} us)"
    )

    try:
        catalog = load_catalog(config.scan.search_path)
    except DirectoryUnreadable as e:
        logger.error(str(e))
        return EXIT_IOERR

    if not catalog:
        logger.info(f"No capture files found in {config.scan.search_path}; nothing to do")
        return EXIT_OK

    selected = select_files(catalog, window.first_date, window.last_date)

    aggregator = StreamingAggregator(src_mac, window)
    with performance_monitor("Capture scan"):
        aggregator.scan(
            [entry.path for entry in selected], show_progress=config.scan.show_progress
        )

    emit_results(aggregator, src_mac, window, config.output.output_dir)

    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main function"""
    args = parse_arguments(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger(__name__)

    try:
        return run(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.error(f"Aggregation failed: {str(e)}", exc_info=True)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
