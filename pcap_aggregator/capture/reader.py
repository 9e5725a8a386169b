"""
Capture Record Reader

Streams raw records out of a capture file using scapy's raw readers, without
dissecting packets. Classic pcap (microsecond or nanosecond resolution) and
pcapng files are both accepted; scapy picks the format from the file magic.
"""

import os
from dataclasses import dataclass
from typing import Iterator

from scapy.error import Scapy_Exception
from scapy.utils import RawPcapNgReader, RawPcapReader

from pcap_aggregator.exceptions import CaptureFileError

MICROS_PER_SECOND = 1_000_000


@dataclass(frozen=True)
class CaptureRecord:
    """One captured frame as handed over by the capture reader"""

    data: bytes
    sec: int
    usec: int
    wirelen: int

    @property
    def arrival_micros(self) -> int:
        return self.sec * MICROS_PER_SECOND + self.usec


class CaptureReader:
    """
    Iterate the records of a single capture file in file order.

    Usable as a context manager; the underlying file is closed on exit.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = path
        try:
            self._reader = RawPcapReader(str(path))
        except (OSError, Scapy_Exception) as e:
            raise CaptureFileError(path, f"cannot open capture file: {e}") from e

    def __enter__(self) -> "CaptureReader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self._reader.close()

    def __iter__(self) -> Iterator[CaptureRecord]:
        is_pcapng = isinstance(self._reader, RawPcapNgReader)
        nano = getattr(self._reader, "nano", False)

        try:
            for data, metadata in self._reader:
                if is_pcapng:
                    record = self._record_from_pcapng(data, metadata)
                    if record is not None:
                        yield record
                    continue

                usec = metadata.usec // 1000 if nano else metadata.usec
                yield CaptureRecord(
                    data=data, sec=metadata.sec, usec=usec, wirelen=metadata.wirelen
                )
        except (OSError, Scapy_Exception) as e:
            raise CaptureFileError(self.path, f"read failed: {e}") from e

    @staticmethod
    def _record_from_pcapng(data: bytes, metadata) -> CaptureRecord | None:
        # Simple Packet Blocks carry no timestamp and cannot be placed in the window
        if metadata.tshigh is None or metadata.tslow is None:
            return None

        # pcapng stores a 64-bit tick count at the interface's resolution
        ticks = (metadata.tshigh << 32) + metadata.tslow
        micros = ticks * MICROS_PER_SECOND // int(metadata.tsresol)
        return CaptureRecord(
            data=data,
            sec=micros // MICROS_PER_SECOND,
            usec=micros % MICROS_PER_SECOND,
            wirelen=metadata.wirelen,
        )
