import pytest

from pcap_aggregator.capture import parse_mac, resolve_window


@pytest.fixture
def src_mac():
    return parse_mac("00:11:22:33:44:55")


@pytest.fixture
def other_mac():
    return parse_mac("66:77:88:99:aa:bb")


@pytest.fixture
def window():
    """One hour window, 10:00:00 to 10:59:59 at +09:00"""
    return resolve_window("2022-01-31T10:00:00+09:00", "2022-01-31T10:59:59+09:00")
