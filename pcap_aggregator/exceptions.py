"""
Exception types raised by the aggregation pipeline
"""


class PcapAggregatorError(Exception):
    """Base class for all aggregation errors"""


class MalformedMacAddress(PcapAggregatorError, ValueError):
    """The MAC address text is not six colon-separated hex octets"""


class InvalidTimestamp(PcapAggregatorError, ValueError):
    """A window timestamp is unparseable, lacks an offset, or the window is inverted"""


class DirectoryUnreadable(PcapAggregatorError, OSError):
    """The capture search directory cannot be listed"""


class CaptureFileError(PcapAggregatorError):
    """A single capture file cannot be opened or read"""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
