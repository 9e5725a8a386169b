"""
Performance monitoring utilities
"""

import time
from contextlib import contextmanager

import psutil

from pcap_aggregator.utils.logging import get_logger

logger = get_logger(__name__)


def get_process_memory() -> float:
    """Get current process memory usage in MB"""
    try:
        process = psutil.Process()
        return process.memory_info().rss / (1024 * 1024)
    except psutil.Error as e:
        logger.error(f"Failed to get process memory: {e}")
        return 0.0


def format_duration(duration: float) -> str:
    """Render a duration in seconds as '1.23 seconds' or '2m 3.45s'"""
    if duration < 60:
        return f"{duration:.2f} seconds"
    minutes = duration // 60
    seconds = duration % 60
    return f"{int(minutes)}m {seconds:.2f}s"


@contextmanager
def performance_monitor(operation_name: str = "Operation", log_memory: bool = True):
    """Context manager logging duration and process memory of an operation"""
    start_time = time.time()
    start_memory = get_process_memory() if log_memory else None

    logger.debug(f"Starting {operation_name}")
    if start_memory:
        logger.debug(f"Initial process memory: {start_memory:.1f}MB")

    try:
        yield
    finally:
        duration = time.time() - start_time
        logger.info(f"{operation_name} completed in {format_duration(duration)}")

        if log_memory and start_memory:
            end_memory = get_process_memory()
            logger.debug(
                f"Final process memory: {end_memory:.1f}MB ({end_memory - start_memory:+.1f}MB)"
            )
