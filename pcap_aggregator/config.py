"""
Configuration management for the capture aggregation tool
"""

import os
from dataclasses import dataclass, field


def _default_search_path() -> str:
    # Environment override for deployments that store captures elsewhere
    return os.environ.get("PCAP_AGGREGATOR_SEARCH_PATH", "/var/large-store/arkime/raw/")


@dataclass
class LoggingConfig:
    """Logging configuration"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    console_output: bool = True


@dataclass
class ScanConfig:
    """Capture directory scanning configuration"""

    search_path: str = field(default_factory=_default_search_path)
    file_pattern: str = r".*-(?P<date>\d{6})-(?P<sequence>\d{8})\.pcap"
    date_format: str = "%y%m%d"
    lookback_files: int = 1  # Files kept before the first in-window date
    show_progress: bool = True


@dataclass
class OutputConfig:
    """Result table output configuration"""

    output_dir: str = "."
    length_suffix: str = "len-distr"
    interval_suffix: str = "arrival-interval-distr"
    timestamp_format: str = "%Y%m%dT%H%M%S"
    extension: str = ".tsv"


@dataclass
class Config:
    """Main configuration class"""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


# Global configuration instance
config = Config()
