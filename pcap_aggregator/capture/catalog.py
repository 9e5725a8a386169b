"""
Capture File Catalog

Discovers rotated capture files in a directory. Files are expected to follow
the rotation naming convention ``<prefix>-<YYMMDD>-<8-digit-sequence>.pcap``;
anything else in the directory is ignored.
"""

import os
import re
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from pcap_aggregator.config import config
from pcap_aggregator.exceptions import DirectoryUnreadable
from pcap_aggregator.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CaptureFileEntry:
    """One rotated capture file, identified by its sequence number and day"""

    path: Path
    sequence_id: int
    embedded_date: date


def parse_capture_filename(
    filename: str, pattern: re.Pattern | None = None
) -> tuple[date, int] | None:
    """
    Extract (embedded_date, sequence_id) from a capture file name.

    Returns None when the name does not follow the naming convention or its
    date digits are not a real calendar day.
    """
    pattern = pattern or re.compile(config.scan.file_pattern)
    match = pattern.fullmatch(filename)
    if match is None:
        return None

    try:
        embedded_date = datetime.strptime(match.group("date"), config.scan.date_format).date()
        sequence_id = int(match.group("sequence"))
    except (ValueError, IndexError):
        return None

    return embedded_date, sequence_id


def build_catalog(directory: str | os.PathLike) -> list[CaptureFileEntry]:
    """
    List ``directory`` and return an entry for every capture file in it.

    The result is in directory order; use sort_catalog() before selecting.

    Raises:
        DirectoryUnreadable: if the directory itself cannot be listed
    """
    pattern = re.compile(config.scan.file_pattern)
    entries: list[CaptureFileEntry] = []
    ignored = 0

    try:
        with os.scandir(directory) as it:
            for dir_entry in it:
                parsed = parse_capture_filename(dir_entry.name, pattern)
                if parsed is None or not dir_entry.is_file():
                    logger.debug(f"Ignoring non-capture entry: {dir_entry.name}")
                    ignored += 1
                    continue

                embedded_date, sequence_id = parsed
                entries.append(
                    CaptureFileEntry(
                        path=Path(dir_entry.path),
                        sequence_id=sequence_id,
                        embedded_date=embedded_date,
                    )
                )
    except OSError as e:
        raise DirectoryUnreadable(f"Cannot list capture directory {directory}: {e}") from e

    logger.debug(f"Found {len(entries)} capture files in {directory} ({ignored} ignored)")
    return entries


def sort_catalog(entries: list[CaptureFileEntry]) -> list[CaptureFileEntry]:
    """Order entries by ascending sequence number (file name breaks ties)"""
    return sorted(entries, key=lambda entry: (entry.sequence_id, entry.path.name))


def load_catalog(directory: str | os.PathLike) -> list[CaptureFileEntry]:
    """Build and sort the catalog for ``directory``"""
    return sort_catalog(build_catalog(directory))
