"""
Streamlined logging utilities
"""

import logging
import sys
from pathlib import Path

from pcap_aggregator.config import config


def setup_logging(level: str = None, log_file: str = None) -> None:
    """Setup logging configuration"""
    level = (level or config.logging.level).upper()

    # Update config
    config.logging.level = level

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level))

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Create formatter
    formatter = logging.Formatter(config.logging.format)

    # Console handler (stderr: stdout carries result tables when a write fails)
    if config.logging.console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, level))
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(getattr(logging, level))
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug(f"Logging initialized - Level: {level}")


class AggregatorLogger:
    """Thin wrapper over a standard logger"""

    def __init__(self, name: str = __name__):
        self.name = name
        self.logger = logging.getLogger(name)

    # Standard logging methods
    def debug(self, message: str):
        self.logger.debug(message)

    def info(self, message: str):
        self.logger.info(message)

    def warning(self, message: str):
        self.logger.warning(message)

    def error(self, message: str, exc_info: bool = False):
        self.logger.error(message, exc_info=exc_info)

    def critical(self, message: str):
        self.logger.critical(message)


def get_logger(name: str = __name__) -> AggregatorLogger:
    """Get a logger instance"""
    return AggregatorLogger(name)
