"""
Streaming Aggregator

Single-pass aggregation of packet-length and inter-arrival-time distributions
over a sequence of capture files. Records are consumed one at a time and only
the two frequency tables and the previous arrival time are kept in memory.

Capture files are assumed to be written in time order, within and across
files, so the first matching record past the window end stops the whole scan.
"""

import os
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from tqdm import tqdm

from pcap_aggregator.capture.mac import MacAddress
from pcap_aggregator.capture.reader import CaptureReader, CaptureRecord
from pcap_aggregator.capture.window import TimeWindow
from pcap_aggregator.exceptions import CaptureFileError
from pcap_aggregator.utils.logging import get_logger

logger = get_logger(__name__)

# Ethernet header: destination (0-5), source (6-11)
SRC_MAC_OFFSET = 6
SRC_MAC_END = 12


class RecordOutcome(Enum):
    """What the scan should do after a record has been offered"""

    CONTINUE = "continue"  # counted, keep scanning
    SKIP = "skip"  # not counted, keep scanning
    HALT = "halt"  # past the window, stop the whole scan


@dataclass
class ScanSummary:
    """Counters describing one aggregation run"""

    files_selected: int = 0
    files_read: int = 0
    files_skipped: int = 0
    records_read: int = 0
    records_matched: int = 0
    records_counted: int = 0
    halted: bool = False

    def describe(self) -> str:
        return (
            f"{self.files_read}/{self.files_selected} files read "
            f"({self.files_skipped} skipped), {self.records_read} records read, "
            f"{self.records_matched} from source MAC, {self.records_counted} in window"
            + (", stopped at window end" if self.halted else "")
        )


class StreamingAggregator:
    """
    Owns the frequency tables and arrival cursor for one aggregation run.

    Attributes:
        length_table: declared wire length -> number of records
        interval_table: microseconds since the previous counted record -> count
    """

    def __init__(self, src_mac: MacAddress, window: TimeWindow):
        self.src_mac = src_mac
        self.window = window
        self.length_table: Counter[int] = Counter()
        self.interval_table: Counter[int] = Counter()
        self.prev_arrival = 0  # 0 until the first record is counted
        self.summary = ScanSummary()

    def update(self, record: CaptureRecord) -> RecordOutcome:
        """Offer one record to the aggregation"""
        self.summary.records_read += 1

        if record.data[SRC_MAC_OFFSET:SRC_MAC_END] != self.src_mac:
            return RecordOutcome.SKIP
        self.summary.records_matched += 1

        arrival = record.arrival_micros
        if arrival < self.window.first_micros:
            return RecordOutcome.SKIP
        if arrival > self.window.last_micros:
            return RecordOutcome.HALT

        self.length_table[record.wirelen] += 1
        if self.prev_arrival != 0:
            self.interval_table[arrival - self.prev_arrival] += 1
        self.prev_arrival = arrival
        self.summary.records_counted += 1

        return RecordOutcome.CONTINUE

    def consume(self, records: Iterable[CaptureRecord]) -> bool:
        """
        Feed records in order.

        Returns:
            False once a record past the window end has been seen, True if
            the records were exhausted
        """
        for record in records:
            if self.update(record) is RecordOutcome.HALT:
                self.summary.halted = True
                return False
        return True

    def scan(self, paths: Iterable[str | os.PathLike], show_progress: bool = False) -> ScanSummary:
        """
        Aggregate every file in ``paths`` in the given order.

        A file that cannot be opened or read is logged and skipped. The scan
        stops as soon as a matching record past the window end is seen.
        """
        paths = list(paths)
        self.summary.files_selected += len(paths)

        for path in tqdm(paths, desc="Scanning captures", unit="file", disable=not show_progress):
            try:
                with CaptureReader(path) as reader:
                    keep_going = self.consume(reader)
            except CaptureFileError as e:
                logger.warning(f"Skipping capture file {e.path}: {e.reason}")
                self.summary.files_skipped += 1
                continue

            self.summary.files_read += 1
            if not keep_going:
                logger.debug(f"Window end passed in {path}, stopping scan")
                break

        logger.info(f"Scan finished: {self.summary.describe()}")
        return self.summary
