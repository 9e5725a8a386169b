"""
Ethernet MAC address parsing and formatting
"""

import re

from pcap_aggregator.exceptions import MalformedMacAddress

_MAC_PATTERN = re.compile(r"[0-9A-Fa-f]{2}(?::[0-9A-Fa-f]{2}){5}")


class MacAddress(bytes):
    """A 6-byte Ethernet address, compared byte for byte"""

    def __new__(cls, value: bytes):
        if len(value) != 6:
            raise MalformedMacAddress(f"MAC address must be 6 bytes, got {len(value)}")
        return super().__new__(cls, value)

    def __str__(self) -> str:
        return format_colon_hex(self)

    def __repr__(self) -> str:
        return f"MacAddress('{format_colon_hex(self)}')"


def parse_mac(text: str) -> MacAddress:
    """
    Parse a colon separated MAC address such as ``00:1A:2b:3c:4d:5e``.

    Exactly six two-digit hex octets are accepted; anything else raises
    MalformedMacAddress.
    """
    if not isinstance(text, str) or not _MAC_PATTERN.fullmatch(text):
        raise MalformedMacAddress(f"Invalid MAC address: {text!r}")
    return MacAddress(bytes.fromhex(text.replace(":", "")))


def format_colon_hex(addr: bytes) -> str:
    return ":".join(f"{octet:02x}" for octet in addr)


def format_compact_hex(addr: bytes) -> str:
    return addr.hex()
