"""
Capture Processing Module

Tools for scanning rotated capture files and aggregating per-direction
traffic distributions.

Components:
- mac: MAC address parsing and formatting
- window: inclusive microsecond time windows from offset-aware timestamps
- catalog: discovery of rotated capture files
- selector: file-range pruning by embedded date
- reader: raw record streaming over scapy
- aggregator: single-pass length and inter-arrival aggregation
- emitter: tab separated result tables
"""

from .aggregator import RecordOutcome, ScanSummary, StreamingAggregator
from .catalog import CaptureFileEntry, build_catalog, load_catalog, sort_catalog
from .emitter import emit_results, emit_table, format_table, output_filename
from .mac import MacAddress, format_colon_hex, format_compact_hex, parse_mac
from .reader import CaptureReader, CaptureRecord
from .selector import select_files, select_range
from .window import TimeWindow, parse_timestamp, resolve_window

__all__ = [
    "CaptureFileEntry",
    "CaptureReader",
    "CaptureRecord",
    "MacAddress",
    "RecordOutcome",
    "ScanSummary",
    "StreamingAggregator",
    "TimeWindow",
    "build_catalog",
    "emit_results",
    "emit_table",
    "format_colon_hex",
    "format_compact_hex",
    "format_table",
    "load_catalog",
    "output_filename",
    "parse_mac",
    "parse_timestamp",
    "resolve_window",
    "select_files",
    "select_range",
    "sort_catalog",
]
