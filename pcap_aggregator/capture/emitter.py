"""
Result Emitter

Writes the frequency tables as tab separated ``key<TAB>count`` rows sorted by
key. When an output file cannot be created the rows go to stdout instead.
"""

import os
import sys
from collections.abc import Mapping
from pathlib import Path

import pandas as pd

from pcap_aggregator.capture.aggregator import StreamingAggregator
from pcap_aggregator.capture.mac import MacAddress, format_compact_hex
from pcap_aggregator.capture.window import TimeWindow
from pcap_aggregator.config import config
from pcap_aggregator.utils.logging import get_logger

logger = get_logger(__name__)


def format_table(table: Mapping[int, int]) -> str:
    """Render a frequency table as sorted ``key\\tcount`` lines"""
    if not table:
        return ""
    series = pd.Series(dict(table), dtype="int64").sort_index()
    return series.to_csv(sep="\t", header=False, lineterminator="\n")


def output_filename(mac: MacAddress, window: TimeWindow, kind: str) -> str:
    """
    Build ``<mac>-<first>--<last>-<kind>.tsv`` with timestamps in the
    wall-clock time of the offset they were given with.
    """
    fmt = config.output.timestamp_format
    return (
        f"{format_compact_hex(mac)}-{window.first.strftime(fmt)}--"
        f"{window.last.strftime(fmt)}-{kind}{config.output.extension}"
    )


def emit_table(table: Mapping[int, int], path: str | os.PathLike) -> bool:
    """
    Write ``table`` to ``path``.

    Returns:
        True if the file was written, False if the rows went to stdout
    """
    text = format_table(table)
    try:
        with open(path, "w", newline="") as f:
            f.write(text)
    except OSError as e:
        logger.warning(f"Failed to write {path} ({e}); writing table to stdout instead")
        sys.stdout.write(text)
        sys.stdout.flush()
        return False

    logger.info(f"Wrote {len(table)} rows to {path}")
    return True


def emit_results(
    aggregator: StreamingAggregator,
    mac: MacAddress,
    window: TimeWindow,
    output_dir: str | os.PathLike | None = None,
) -> dict[str, Path | None]:
    """
    Emit both distributions of a finished aggregation run.

    Returns:
        Mapping of table kind to written path, or None where the table fell
        back to stdout
    """
    output_dir = Path(output_dir if output_dir is not None else config.output.output_dir)
    tables = {
        config.output.length_suffix: aggregator.length_table,
        config.output.interval_suffix: aggregator.interval_table,
    }

    written: dict[str, Path | None] = {}
    for kind, table in tables.items():
        path = output_dir / output_filename(mac, window, kind)
        written[kind] = path if emit_table(table, path) else None
    return written
