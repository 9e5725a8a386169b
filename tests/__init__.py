"""
Tests for pcap_aggregator

Test coverage:
- MAC address parsing and formatting
- Time window resolution and boundary arithmetic
- Capture file discovery and range selection
- Streaming aggregation, early exit and cross-file interval tracking
- Result table emission and CLI exit statuses
"""
