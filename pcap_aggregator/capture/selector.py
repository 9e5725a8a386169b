"""
Select the contiguous run of catalog files that can hold in-window packets
"""

from datetime import date

from pcap_aggregator.capture.catalog import CaptureFileEntry
from pcap_aggregator.config import config
from pcap_aggregator.utils.logging import get_logger

logger = get_logger(__name__)


def select_range(
    catalog: list[CaptureFileEntry], start_date: date, end_date: date
) -> tuple[int, int]:
    """
    Compute the inclusive index range ``(first_idx, last_idx)`` of files to scan.

    The lower bound is the first file dated on or after ``start_date``, moved
    back by ``config.scan.lookback_files`` positions (clamped at 0) so that a
    file rotated before midnight is still read. The upper bound is the file
    just before the first one dated after ``end_date``, or the last file.

    The catalog must be sorted by sequence number, and sequence order is
    assumed to follow date order. Files selected outside the window are
    harmless: the aggregator filters every packet by timestamp.

    Raises:
        ValueError: if the catalog is empty
    """
    if not catalog:
        raise ValueError("Cannot select files from an empty catalog")

    last_index = len(catalog) - 1
    first_idx = None
    last_idx = last_index

    for i, entry in enumerate(catalog):
        if first_idx is None and entry.embedded_date >= start_date:
            first_idx = max(i - config.scan.lookback_files, 0)
        if entry.embedded_date > end_date:
            last_idx = i - 1
            break

    if first_idx is None:
        # Every file predates the window; keep the newest one
        first_idx = last_index

    last_idx = max(last_idx, first_idx)
    return first_idx, last_idx


def select_files(
    catalog: list[CaptureFileEntry], start_date: date, end_date: date
) -> list[CaptureFileEntry]:
    """Return the catalog entries chosen by select_range(), in scan order"""
    first_idx, last_idx = select_range(catalog, start_date, end_date)
    selected = catalog[first_idx : last_idx + 1]
    logger.info(
        f"Selected {len(selected)}/{len(catalog)} capture files "
        f"(sequence {selected[0].sequence_id} to {selected[-1].sequence_id})"
    )
    return selected
